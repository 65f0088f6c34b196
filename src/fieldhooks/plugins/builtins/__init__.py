"""Built-in plugins registered by every site."""

"""pageshift — move elm-spa pages between static, element and advanced."""

__version__ = "0.1.0"

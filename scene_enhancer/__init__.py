"""Product scene enhancer: vision-planned product staging over HTTP."""

__version__ = "1.0.0"

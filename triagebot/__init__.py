"""triagebot: issue comment commands and label authorization."""

__version__ = "0.1.0"

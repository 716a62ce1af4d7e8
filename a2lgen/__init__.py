"""Find C declarations annotated with A2L comments and read the annotations."""

__version__ = "0.1.0"
__all__ = ["__version__"]
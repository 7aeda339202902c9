"""ReadTrace - cross-platform manga reading progress tracker."""
__version__ = "0.1.0"

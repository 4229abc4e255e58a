"""Version metadata for CarSharing."""

__app_name__ = "CarSharing"
__company__ = "CarSharing"
__version__ = "1.0.0"

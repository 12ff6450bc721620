from .bookings import Base, Bookings, metadata

__all__ = ["Base", "Bookings", "metadata"]

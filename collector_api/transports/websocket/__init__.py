from .hub import REFRESH_SIGNAL, NotificationHub

__all__ = ["NotificationHub", "REFRESH_SIGNAL"]

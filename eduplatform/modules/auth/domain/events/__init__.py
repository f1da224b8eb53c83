from .auth_events import AuthChangeEvent, Subscription

__all__ = ["AuthChangeEvent", "Subscription"]

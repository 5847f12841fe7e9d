import threading

__all__ = [
    "Singleton",
]


class Singleton(type):
    """Metaclass that creates process-wide singleton classes.

    The first call constructs the instance; every later call returns it and
    ignores its arguments. Construction is guarded so that two threads racing
    on the first call still observe one instance.

    Attributes:
        _instances (dict): Dictionary storing singleton instances keyed by class.
    """
    _instances = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        """Create or return existing instance of the class."""
        if cls not in cls._instances:
            with Singleton._lock:
                if cls not in cls._instances:
                    cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def drop_instance(cls) -> None:
        """Forget the instance so the next call constructs a new one."""
        with Singleton._lock:
            cls._instances.pop(cls, None)

class Singleton:
    """
    Base class for process-wide services.

    Subclasses get one shared instance per class. Their ``__init__`` runs on
    every construction, so subclasses guard their own setup with a flag.
    """

    _instances = {}

    def __new__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__new__(cls)
        return cls._instances[cls]

    @classmethod
    def reset_instance(cls):
        """Forget the shared instance so the next construction builds a new one."""
        cls._instances.pop(cls, None)

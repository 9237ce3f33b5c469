from .supervisor import DriverHandle, launch, running_driver  # noqa: F401

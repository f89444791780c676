from django.apps import AppConfig


class RegistrationConfig(AppConfig):
    """Configuration for the registration app."""

    name = "registration"

    def ready(self) -> None:
        """Build the shared services once Django is fully loaded."""
        from registration.container import get_registry

        get_registry()

"""Settings resolution utilities for Query configuration."""

from __future__ import annotations

from typing import Any

from pyorbit.utils.types import DEFAULT_CURSOR_VARIABLE


class SettingsResolver:
    """Resolves query settings from inner Settings class."""

    @staticmethod
    def get_document(cls: type) -> str:
        """Get the GraphQL document text from Settings.

        Args:
            cls: Query class

        Returns:
            Document text

        Raises:
            ValueError: If the Settings class declares no document
        """
        settings = getattr(cls, "Settings", None)
        document = getattr(settings, "document", None) if settings else None
        if not isinstance(document, str) or not document.strip():
            raise ValueError(
                f"{cls.__name__}.Settings must declare a non-empty 'document'"
            )
        return document.strip()

    @staticmethod
    def get_operation_name(cls: type) -> str:
        """Get operation name from Settings or fall back to the class name.

        Args:
            cls: Query class

        Returns:
            Operation name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "operation_name"):
            return settings.operation_name
        name = cls.__name__
        if name.endswith("Query") and len(name) > len("Query"):
            return name[: -len("Query")]
        return name

    @staticmethod
    def get_cursor_variable(cls: type) -> str:
        """Get the name of the variable carrying the pagination cursor.

        Args:
            cls: Query class

        Returns:
            Variable name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "cursor_variable"):
            return settings.cursor_variable
        return DEFAULT_CURSOR_VARIABLE

    @staticmethod
    def get_data_model(cls: type) -> Any:
        """Get the model the response data validates into, or None for raw dicts.

        Args:
            cls: Query class

        Returns:
            Pydantic model class or None
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "data"):
            return settings.data
        return None

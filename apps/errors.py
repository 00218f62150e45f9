class BlueprintStoreError(Exception):
    """Base class for errors raised by the blueprint store itself.

    Storage failures (duplicate keys, null columns, missing parents) are not
    wrapped; they surface as the SQLAlchemy errors the database reports.
    """


class ImmutableRecordError(BlueprintStoreError):
    """A write-once row was modified after it was inserted."""


class InvalidConfigurationError(BlueprintStoreError):
    """A configuration group or payload could not be interpreted."""


class DuplicateConfigurationError(BlueprintStoreError):
    """The same configuration type was given twice for one blueprint."""

class AutomarkError(Exception):
    """Base class for errors raised by the automark plugin."""


class UnknownTableError(AutomarkError):
    def __init__(self, table):
        super().__init__(f"Unknown table: {table}")
        self.table = table


class InvalidFieldError(AutomarkError):
    def __init__(self, table, field):
        super().__init__(f"Table {table} has no field {field}")
        self.table = table
        self.field = field


class MappingNotFoundError(AutomarkError):
    """
    Raised when restore asks for the new id of an item that has not been
    mapped yet (e.g. the core submission was not restored).
    """

    def __init__(self, item, old_id=None):
        if old_id is None:
            message = f"No new parent id mapped for {item}"
        else:
            message = f"No mapping for {item} {old_id}"
        super().__init__(message)
        self.item = item
        self.old_id = old_id

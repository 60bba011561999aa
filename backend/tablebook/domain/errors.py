class BookingError(Exception):
    """Base class for every failure raised by the booking engine."""


class BookingRejectedError(BookingError):
    """A booking request was refused; the caller should refresh availability and resubmit."""


class InvalidSlotError(BookingRejectedError):
    pass


class InvalidPartySizeError(BookingRejectedError):
    pass


class InvalidContactError(BookingRejectedError):
    pass


class DateClosedError(BookingRejectedError):
    pass


class SlotTakenError(BookingRejectedError):
    pass


class BookingNotFoundError(BookingError):
    pass


class StorageUnavailableError(BookingError):
    """The ledger could not be reached in time. The only kind worth retrying."""

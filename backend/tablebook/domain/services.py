from collections.abc import Collection, Iterable

from .errors import InvalidContactError, InvalidPartySizeError, InvalidSlotError


def validate_booking_request(
    grid: Collection[str],
    *,
    time: str,
    guests: int,
    name: str,
    email: str,
    phone: str,
) -> None:
    """
    Pure validation of the request itself (slot label, party size, contact).
    Date and ledger checks need I/O and are done by the admission usecase.
    """
    if time not in grid:
        raise InvalidSlotError(f"{time!r} is not a bookable time")
    # bool is an int subclass; True is not a party size
    if isinstance(guests, bool) or not isinstance(guests, int) or guests < 1:
        raise InvalidPartySizeError("guests must be a positive integer")
    for field, value in (("name", name), ("email", email), ("phone", phone)):
        if not isinstance(value, str) or not value.strip():
            raise InvalidContactError(f"{field} must not be empty")


def free_slots(grid: Iterable[str], booked_times: Collection[str]) -> tuple[str, ...]:
    return tuple(label for label in grid if label not in booked_times)

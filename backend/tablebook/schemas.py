import datetime as dt

from pydantic import BaseModel, StrictInt

from .models import Booking


class Message(BaseModel):
    message: str


class BookingCreate(BaseModel):
    date: dt.date
    time: str
    # Strict so JSON true is not read as a party of one; range and emptiness are checked by the admission usecase.
    guests: StrictInt
    name: str
    email: str
    phone: str


class BookingRead(BaseModel):
    id: int
    date: dt.date
    time: str
    guests: int
    name: str
    email: str
    phone: str

    @classmethod
    def from_db(cls, *, booking: Booking) -> "BookingRead":
        return cls(
            id=booking.id,
            date=booking.date,
            time=booking.time,
            guests=booking.guests,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
        )


class BookingCreated(BaseModel):
    message: str
    booking: BookingRead

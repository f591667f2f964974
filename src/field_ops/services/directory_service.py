"""Home and booking lookup."""
import json
import logging

from shared.schemas import Home, Booking


class HomeDirectory:
    """In-memory directory of homes and bookings.

    Loading homes and bookings from their source systems is out of scope; this
    accepts them ready-made or from a JSON file of {"homes": [...], "bookings": [...]}.
    """

    def __init__(self, homes=(), bookings=()):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._homes = {}
        self._bookings = {}
        for home in homes:
            self.add_home(home)
        for booking in bookings:
            self.add_booking(booking)

    @classmethod
    def from_json_file(cls, path):
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        directory = cls(
            homes=[Home.model_validate(h) for h in data.get('homes', [])],
            bookings=[Booking.model_validate(b) for b in data.get('bookings', [])],
        )
        directory.logger.info(
            f"Loaded {len(directory._homes)} homes and {len(directory._bookings)} bookings from {path}"
        )
        return directory

    def add_home(self, home):
        if not isinstance(home, Home):
            home = Home.model_validate(home)
        self._homes[home.id] = home
        return home

    def add_booking(self, booking):
        if not isinstance(booking, Booking):
            booking = Booking.model_validate(booking)
        self._bookings[booking.id] = booking
        return booking

    def find_home_by_id(self, home_id):
        return self._homes.get(home_id)

    def find_home_by_code(self, code):
        if not code:
            return None
        code = code.upper()
        for home in self._homes.values():
            if home.code.upper() == code:
                return home
        return None

    def find_booking_by_id(self, booking_id):
        """Match either the internal id or the external booking reference."""
        if not booking_id:
            return None
        booking = self._bookings.get(booking_id)
        if booking is not None:
            return booking
        for candidate in self._bookings.values():
            if candidate.booking_id == booking_id:
                return candidate
        return None

    def list_homes(self):
        return sorted(self._homes.values(), key=lambda h: h.code)

    def bookings_for_home(self, home_id):
        return sorted(
            (b for b in self._bookings.values() if b.home_id == home_id),
            key=lambda b: b.check_in,
        )

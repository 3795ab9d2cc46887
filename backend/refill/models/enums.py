"""Enumeration types for Refill."""

from enum import Enum
from typing import Optional


class Amenity(str, Enum):
    REFILL = "refill"
    BREAD = "bread"
    PAY = "pay"
    ATTENDANT = "attendant"

    @property
    def report_field(self) -> str:
        """Name of the answer field on an AmenityReport."""
        return _REPORT_FIELDS[self]

    @property
    def stats_field(self) -> str:
        return f"{self.report_field}_stats"


_REPORT_FIELDS = {
    Amenity.REFILL: "free_refills",
    Amenity.BREAD: "bread_basket",
    Amenity.PAY: "pay_at_table",
    Amenity.ATTENDANT: "attendant",
}


class AnswerBucket(str, Enum):
    YES = "yes"
    NO = "no"
    IDK = "idk"

    @classmethod
    def for_answer(cls, answer: Optional[bool]) -> "AnswerBucket":
        if answer is True:
            return cls.YES
        if answer is False:
            return cls.NO
        return cls.IDK

"""Domain model entities for cardcatalog.

These are pure data classes representing the card checklist, independent of
how sets are stored. Each spreadsheet column becomes one typed attribute of
CanonicalRow so that sorting and statistics work from typed values rather
than from raw header-keyed dictionaries.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum, StrEnum
from typing import Optional

from cardcatalog.utils.amount_parser import parse_amount


class CardField(Enum):
    """Spreadsheet columns, in display order."""

    CARD_NUMBER = "Card #"
    DESCRIPTION = "Description"
    OWNED = "Owned"
    RAW_GRADE = "Raw Grade"
    GRADED = "Graded"
    GRADING_COMPANY = "Grading Company"
    GRADE = "Grade"
    COST = "Cost"
    VALUE = "Value"
    TARGET_PRICE = "Target Price"
    SALE_PRICE = "Sale Price"
    DATE_PURCHASED = "Date Purchased"
    PURCHASED_FROM = "Purchased From"
    IMAGE_REFS = "Upload Image(s)"

    @property
    def header(self) -> str:
        """Column header as it appears in imported and exported files."""
        return self.value

    @property
    def attr(self) -> str:
        """Attribute name on CanonicalRow."""
        return self.name.lower()

    @classmethod
    def parse(cls, name: str) -> "CardField":
        """Resolve a field from its header or attribute name.

        Matching is case-insensitive and treats spaces, dashes and
        underscores alike, so "Target Price", "target_price" and
        "target-price" all resolve to TARGET_PRICE.

        Raises:
            ValueError: If the name matches no field
        """
        wanted = _field_key(name)
        for member in cls:
            if wanted in (_field_key(member.header), _field_key(member.attr)):
                return member
        raise ValueError(f"Unknown field '{name}'")


def _field_key(name: str) -> str:
    return name.strip().lower().replace("_", " ").replace("-", " ")


EXPECTED_HEADERS: tuple[str, ...] = tuple(f.header for f in CardField)

CURRENCY_FIELDS = frozenset(
    {CardField.COST, CardField.VALUE, CardField.TARGET_PRICE, CardField.SALE_PRICE}
)
NUMERIC_FIELDS = frozenset({CardField.GRADE, CardField.CARD_NUMBER})
READ_ONLY_FIELDS = frozenset({CardField.CARD_NUMBER, CardField.DESCRIPTION})

PURCHASED_FROM_MAX_LENGTH = 50


class YesNo(StrEnum):
    """Owned / Graded answer."""

    BLANK = ""
    YES = "Yes"
    NO = "No"


class RawGrade(StrEnum):
    """Condition of an ungraded card, best to worst."""

    BLANK = ""
    GEM_MINT = "Gem Mint"
    MINT = "Mint"
    NM_MT = "NM-MT"
    NM = "NM"
    EXMT = "EXMT"
    EX = "EX"
    VG_EX = "VG-EX"
    VG = "VG"
    GOOD = "G"
    POOR = "P"


class GradingCompany(StrEnum):
    """Third-party grading service."""

    BLANK = ""
    PSA = "PSA"
    SGC = "SGC"


# 10 down to 1 in half steps, written without a trailing ".0"
GRADE_VALUES: tuple[str, ...] = tuple(
    f"{10 - i * 0.5:.1f}".removesuffix(".0") for i in range(19)
)


@dataclass(frozen=True)
class CanonicalRow:
    """One normalized card row."""

    card_number: str = ""
    description: str = ""
    owned: YesNo = YesNo.BLANK
    raw_grade: RawGrade = RawGrade.BLANK
    graded: YesNo = YesNo.BLANK
    grading_company: GradingCompany = GradingCompany.BLANK
    grade: str = ""
    cost: str = ""
    value: str = ""
    target_price: str = ""
    sale_price: str = ""
    date_purchased: str = ""
    purchased_from: str = ""
    image_refs: str = ""

    def text(self, field: CardField) -> str:
        """Return the stored display text of a field."""
        return str(getattr(self, field.attr))

    def to_record(self) -> dict[str, str]:
        """Return the row as a header -> text mapping, in header order."""
        return {f.header: self.text(f) for f in CardField}

    def amount(self, field: CardField) -> Optional[Decimal]:
        """Return a currency field's amount, or None if blank or not a number."""
        try:
            return parse_amount(self.text(field))
        except ValueError:
            return None

    def numeric(self, field: CardField) -> Optional[Decimal]:
        """Return the card number or grade as a number, or None if blank."""
        text = self.text(field).strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        return number if number.is_finite() else None


@dataclass(frozen=True)
class CardSet:
    """A named checklist together with its rows."""

    slug: str
    title: str
    year: Optional[int]
    brand: str
    description: str
    rows: tuple[CanonicalRow, ...] = ()


@dataclass(frozen=True)
class IndexEntry:
    """Summary projection of a CardSet kept in the global index.

    The statistics fields are None for entries read from storage that were
    written without them; PersistenceBridge.list_sets fills them in.
    """

    slug: str
    title: str
    year: Optional[int]
    brand: str
    description: str
    updated_at: datetime
    row_count: int
    owned_count: Optional[int] = None
    owned_pct: Optional[float] = None
    total_cost: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None

    @property
    def has_stats(self) -> bool:
        """Whether all cached statistics are present."""
        return None not in (
            self.owned_count,
            self.owned_pct,
            self.total_cost,
            self.total_value,
            self.gain_loss,
        )


@dataclass(frozen=True)
class OwnedStats:
    """Ownership completion of a set."""

    owned_count: int
    owned_pct: float
    total: int


@dataclass(frozen=True)
class Financials:
    """Money totals of a set."""

    total_cost: Decimal
    total_value: Decimal
    gain_loss: Decimal


@dataclass(frozen=True)
class ViewRow:
    """A row in a sorted/filtered view, with its position in the store."""

    row: CanonicalRow
    original_index: int


def build_title(year: int, brand: str, description: str) -> str:
    """Return the display title of a set."""
    return f"{year} {brand} - {description.strip()}"

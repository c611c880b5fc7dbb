"""
Asset code generation: ``[DUM-]TYPE-YY-MERK-NNNNN``.

Examples: ``LAP-26-DELL-00001``, ``DUM-LAP-26-HP-90001``. Normal assets are
numbered 00001..89999 and dummy assets 90001..99999, per code prefix.
"""
import logging
import re
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.exceptions import BadRequestError, ConflictError
from inventory.db.base import utcnow
from inventory.models.asset import Asset

logger = logging.getLogger(__name__)

DUMMY_PREFIX = "DUM-"
NORMAL_MAX = 89999
DUMMY_START = 90000
DUMMY_MAX = 99999
MAX_CODES_PER_REQUEST = 1000

ASSET_CODE_PATTERN = re.compile(
    r"^(?P<dummy>DUM-)?(?P<type>[A-Z]{2,10})-(?P<year>\d{2})-(?P<brand>[A-Z0-9]{1,4})-(?P<number>\d{5})$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AssetCodeParts:
    is_dummy: bool
    type_code: str
    year: int
    brand_code: str
    number: int


def brand_code(brand: str | None) -> str:
    """Alphanumerics only, uppercased, max 4 chars. "Hewlett-Packard" -> "HEWL", blank -> "XXXX"."""
    cleaned = "".join(ch for ch in (brand or "") if ch.isascii() and ch.isalnum()).upper()
    return cleaned[:4] or "XXXX"


def code_prefix(type_code: str, brand: str | None, is_dummy: bool, year: int | None = None) -> str:
    year = utcnow().year if year is None else year
    prefix = f"{type_code.upper()}-{year % 100:02d}-{brand_code(brand)}"
    return f"{DUMMY_PREFIX}{prefix}" if is_dummy else prefix


def parse_code(asset_code: str | None) -> AssetCodeParts | None:
    if not asset_code:
        return None
    match = ASSET_CODE_PATTERN.match(asset_code.strip())
    if not match:
        return None
    return AssetCodeParts(
        is_dummy=match.group("dummy") is not None,
        type_code=match.group("type").upper(),
        year=int(match.group("year")),
        brand_code=match.group("brand").upper(),
        number=int(match.group("number")),
    )


async def _next_number(db: AsyncSession, prefix: str, is_dummy: bool) -> int:
    result = await db.execute(select(Asset.asset_code).where(Asset.asset_code.like(f"{prefix}-%")))
    parsed = (parse_code(code) for code in result.scalars().all())
    numbers = [parts.number for parts in parsed if parts is not None]

    if is_dummy:
        in_range = [n for n in numbers if n >= DUMMY_START]
        return max(in_range, default=DUMMY_START) + 1
    in_range = [n for n in numbers if n < DUMMY_START]
    return max(in_range, default=0) + 1


async def generate_codes(
    db: AsyncSession,
    type_code: str,
    brand: str | None,
    is_dummy: bool,
    count: int = 1,
    year: int | None = None,
) -> list[str]:
    if count <= 0:
        raise BadRequestError("Count must be greater than 0.")
    if count > MAX_CODES_PER_REQUEST:
        raise BadRequestError(f"Cannot generate more than {MAX_CODES_PER_REQUEST} codes at once.")

    prefix = code_prefix(type_code, brand, is_dummy, year)
    start = await _next_number(db, prefix, is_dummy)
    limit = DUMMY_MAX if is_dummy else NORMAL_MAX

    if start + count - 1 > limit:
        kind = "Dummy" if is_dummy else "Normal"
        raise ConflictError(f"{kind} asset number exceeded maximum ({limit}) for prefix {prefix}.")

    codes = [f"{prefix}-{number:05d}" for number in range(start, start + count)]
    logger.debug("Generated %d code(s) for %s starting at %05d", count, prefix, start)
    return codes


async def generate_code(
    db: AsyncSession, type_code: str, brand: str | None, is_dummy: bool, year: int | None = None
) -> str:
    codes = await generate_codes(db, type_code, brand, is_dummy, 1, year)
    return codes[0]

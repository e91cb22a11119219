"""Sequential invoice numbering for sales."""

import re

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopledger.database.models import Sale

_NUMERIC_ID = re.compile(r"^[0-9]+$")


def next_sale_id(session: Session) -> str:
    """Return the next sale ID: one more than the largest purely numeric ID.

    IDs that are not plain digit strings are ignored. Must run inside the
    same transaction (and under the same write lock) as the sale insert,
    otherwise two writers can compute the same number.
    """
    highest = 0
    for sale_id in session.scalars(select(Sale.id)):
        if _NUMERIC_ID.match(sale_id):
            highest = max(highest, int(sale_id))
    return str(highest + 1)

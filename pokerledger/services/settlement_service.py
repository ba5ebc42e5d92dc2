"""Settlement solver: who pays whom at the end of a session."""

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from pokerledger.core.exceptions import ImbalanceError
from pokerledger.schemas.ledger import SessionRecord, Settlement

# Currency amounts closer than this are considered equal
EPSILON = 0.01


@dataclass
class _Balance:
    """Remaining amount a player still owes or is owed during the sweep."""

    player_id: str
    amount: float


def calculate_settlements(records: Iterable[SessionRecord]) -> list[Settlement]:
    """Turn one session's buy-ins and cash-outs into a list of payments.

    Debtors and creditors are matched greedily, largest first, which keeps the
    number of payments low without searching for a global optimum. Equal
    amounts keep their input order, so identical inputs always produce the
    same plan.

    Args:
        records: One record per participant. Player ids are assumed unique and
            amounts already validated as finite and non-negative.

    Returns:
        Settlements in the order they were matched. Empty when everybody
        broke even.

    Raises:
        ImbalanceError: Total buy-ins and cash-outs differ by more than
            ``EPSILON``. No partial plan is produced.
    """
    records = list(records)
    total_buy_in = sum(r.buy_in for r in records)
    total_cash_out = sum(r.cash_out for r in records)

    if abs(total_buy_in - total_cash_out) > EPSILON:
        logger.info(
            f"Rejecting session: buy-ins {total_buy_in:.2f} != cash-outs {total_cash_out:.2f}"
        )
        raise ImbalanceError.from_totals(total_buy_in, total_cash_out)

    debtors: list[_Balance] = []
    creditors: list[_Balance] = []
    for record in records:
        net = record.net
        if net < -EPSILON:
            debtors.append(_Balance(record.player_id, abs(net)))
        elif net > EPSILON:
            creditors.append(_Balance(record.player_id, net))

    # sorted() is stable, ties stay in input order
    debtors = sorted(debtors, key=lambda b: b.amount, reverse=True)
    creditors = sorted(creditors, key=lambda b: b.amount, reverse=True)

    settlements: list[Settlement] = []
    i = 0
    j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        amount = min(debtor.amount, creditor.amount)

        settlements.append(
            Settlement(
                from_id=debtor.player_id,
                to_id=creditor.player_id,
                amount=round(amount, 2),
            )
        )

        debtor.amount -= amount
        creditor.amount -= amount
        if debtor.amount < EPSILON:
            i += 1
        if creditor.amount < EPSILON:
            j += 1

    logger.debug(
        f"Settled {len(debtors)} debtor(s) and {len(creditors)} creditor(s) "
        + f"with {len(settlements)} payment(s)"
    )
    return settlements

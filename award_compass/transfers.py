"""Credit-card transfer option calculation."""

import math
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from .models import CreditCardProgram, TransferOption, TransferPartnership


def effective_ratio(partnership: TransferPartnership) -> Decimal:
    """Bonus ratio while a bonus is active and set, else the base ratio."""
    if partnership.is_bonus_active and partnership.bonus_ratio:
        return partnership.bonus_ratio
    return partnership.transfer_ratio


def points_needed(min_miles: int, ratio: Decimal) -> int:
    """Card points to transfer for *min_miles* at *ratio* miles per point."""
    return math.ceil(Decimal(min_miles) / Decimal(str(ratio)))


class TransferCalculator:
    """Transfer partnerships indexed by airline program."""

    def __init__(
        self,
        card_programs: Iterable[CreditCardProgram],
        partnerships: Iterable[TransferPartnership],
    ):
        self._cards = {c.id: c for c in card_programs}
        self._by_program: dict[int, list[TransferPartnership]] = defaultdict(list)
        for partnership in partnerships:
            self._by_program[partnership.airline_program_id].append(partnership)

    def card_programs(self) -> list[CreditCardProgram]:
        return list(self._cards.values())

    def partners_for_program(self, program_id: int) -> list[tuple[CreditCardProgram, TransferPartnership]]:
        """Every card transferring into *program_id*, by card name."""
        pairs = [
            (self._cards[p.credit_card_program_id], p)
            for p in self._by_program.get(program_id, [])
            if p.credit_card_program_id in self._cards
        ]
        return sorted(pairs, key=lambda pair: pair[0].name.casefold())

    def transfer_options(
        self,
        program_id: int,
        min_miles: int,
        enabled_card_codes: Iterable[str],
    ) -> list[TransferOption]:
        """One option per enabled card partnering with *program_id*.

        Options come back in partnership enumeration order, unsorted.
        """
        enabled = set(enabled_card_codes)
        if not enabled:
            return []

        options = []
        for partnership in self._by_program.get(program_id, []):
            card = self._cards.get(partnership.credit_card_program_id)
            if card is None or card.code not in enabled:
                continue
            options.append(TransferOption(
                card_program=card,
                transfer_ratio=partnership.transfer_ratio,
                transfer_time_hours=partnership.transfer_time_hours,
                points_needed=points_needed(min_miles, effective_ratio(partnership)),
                is_bonus_active=partnership.is_bonus_active,
                bonus_ratio=partnership.bonus_ratio,
                bonus_expires_at=partnership.bonus_expires_at,
            ))
        return options

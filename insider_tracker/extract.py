from __future__ import annotations

from typing import Iterable, List, Optional

from insider_tracker.classify import classify, is_open_market
from insider_tracker.models import ClassifiedTrade, DisclosureDocument, FilterMode, TransactionEntry


def _row(
    doc: DisclosureDocument,
    tx: TransactionEntry,
    discriminator: object,
    *,
    issuer_symbol: str | None = None,
    reporter_name: str | None = None,
) -> ClassifiedTrade:
    c = classify(tx.code)
    return ClassifiedTrade(
        id=f"{doc.id}-{discriminator}",
        transaction_date=tx.transaction_date,
        code=tx.code,
        type_label=c.label,
        polarity=c.polarity,
        shares=tx.shares,
        price_per_share=tx.price_per_share,
        issuer_symbol=issuer_symbol,
        reporter_name=reporter_name,
    )


def extract_feed(documents: Optional[Iterable[DisclosureDocument]]) -> List[ClassifiedTrade]:
    """Rows for the latest-trades feed: P/S entries only, keyed by issuer symbol.

    Row ids use the transaction date plus the entry index, so same-day lines
    of one filing stay distinct.
    """
    out: List[ClassifiedTrade] = []
    if not documents:
        return out
    for doc in documents:
        for i, tx in enumerate(doc.transactions or ()):
            if not is_open_market(tx.code):
                continue
            out.append(_row(doc, tx, f"{tx.transaction_date}-{i}", issuer_symbol=doc.issuer.symbol))
    return out


def extract_main(
    documents: Optional[Iterable[DisclosureDocument]],
    filter_mode: FilterMode | str = FilterMode.PS_ONLY,
) -> List[ClassifiedTrade]:
    """Rows for the main table, keyed by reporting owner.

    PS_ONLY keeps open-market purchases and sales; ALL keeps every entry.
    Row ids use the entry's index within its document.
    """
    mode = FilterMode(filter_mode)
    out: List[ClassifiedTrade] = []
    if not documents:
        return out
    for doc in documents:
        for i, tx in enumerate(doc.transactions or ()):
            if mode is FilterMode.PS_ONLY and not is_open_market(tx.code):
                continue
            out.append(_row(doc, tx, i, reporter_name=doc.reporter_name))
    return out

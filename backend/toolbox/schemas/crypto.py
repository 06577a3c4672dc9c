from __future__ import annotations

from toolbox.models.crypto_rates import CryptoRate
from toolbox.schemas.derive import insert_model, record_model


CRYPTO_RATE_INSERT_FIELDS = ("from_currency", "to_currency", "rate", "market_data")


class CryptoRateCreateRequest(insert_model(CryptoRate, CRYPTO_RATE_INSERT_FIELDS)):
    """
    A freshly fetched rate for one currency pair.

    `rate` is kept as an exact Decimal end to end (stored as decimal text).
    """


CryptoRateResponse = record_model(CryptoRate, name="CryptoRateResponse")

import asyncio
from datetime import date, timedelta

from ecb_fx import FxRateResolver, RateQuery, get_fx_rate

print(get_fx_rate("JPY"))  # today's EUR/JPY reference rate

# Cross rate: how many JPY per BGN
print(get_fx_rate("JPY/BGN"))

# Dedicated resolver with its own cache
fx = FxRateResolver()

# Specific day; weekends and holidays fall back to the previous business day
print(fx.rate_sync(RateQuery(currency="USD", date=date(2024, 6, 9))))

# Only accept the exact day
print(fx.rate_sync({"currency": "USD", "date": date(2024, 6, 7), "exact_date": True}))


async def main() -> None:
    # Concurrent lookups for the same feed share one download
    yesterday = date.today() - timedelta(days=1)
    rates = await asyncio.gather(
        fx.rate({"currency": "JPY", "date": date.today()}),
        fx.rate({"currency": "JPY", "date": yesterday}),
    )
    print(rates)


asyncio.run(main())

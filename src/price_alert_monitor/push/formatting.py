"""Notification text for fired alerts."""
from price_alert_monitor.db import Alert, AlertDirection, Market
from price_alert_monitor.schemas import PushMessage

_DIRECTION_TEXT = {
    AlertDirection.ABOVE: ("📈", "상승"),
    AlertDirection.BELOW: ("📉", "하락"),
}


def format_price(market: Market, price: float) -> str:
    """KRW with a 원 suffix for domestic, USD with two decimals for foreign."""
    if market is Market.KR:
        if float(price).is_integer():
            return f"{int(price):,}원"
        return f"{price:,.2f}원"
    return f"${price:,.2f}"


def alert_link(alert: Alert, site_url: str = "") -> str:
    """Deep link to the alert instrument's page."""
    return f"{site_url}/market/{alert.ticker}?market={alert.market.value.lower()}"


def compose_message(alert: Alert, current_price: float, site_url: str = "") -> PushMessage:
    """Build the push message for one fired alert."""
    emoji, direction = _DIRECTION_TEXT[alert.direction]
    current = format_price(alert.market, current_price)
    target = format_price(alert.market, alert.target_price)
    link = alert_link(alert, site_url)
    return PushMessage(
        alert_id=alert.id,
        title=f"{emoji} {alert.stock_name} 목표가 {direction}!",
        body=f"{alert.stock_name}이(가) {current}에 도달했습니다. (목표가: {target})",
        link=link,
        data={
            "alertId": str(alert.id),
            "ticker": alert.ticker,
            "market": alert.market.value,
            "targetPrice": str(alert.target_price),
            "currentPrice": str(current_price),
            "link": link,
        },
    )

"""DI container. Wire via init_container(); endpoints use Depends(Provide[Container.*])."""
from typing import Annotated

from dependency_injector import containers, providers
from dependency_injector.wiring import Provide
from fastapi import Depends

from price_alert_monitor.config import Settings, get_settings
from price_alert_monitor.db import Market
from price_alert_monitor.db.sessions import build_engine
from price_alert_monitor.db.store import AlertStore
from price_alert_monitor.providers import (FinnhubProvider, KisClient,
                                           KisDomesticProvider,
                                           KisOverseasProvider)
from price_alert_monitor.push import FirebasePushTransport
from price_alert_monitor.services import (AlertCheckService,
                                          NotificationDispatcher,
                                          PriceLookupGateway, TriggerRecorder)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=["price_alert_monitor.routers.notifications"]
    )

    settings = providers.Singleton(get_settings)

    engine = providers.Singleton(
        build_engine,
        settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )
    store = providers.Singleton(AlertStore, engine)

    # Vendors (one per market)
    kis_client = providers.Singleton(
        KisClient,
        app_key=settings.provided.kis_app_key,
        app_secret=settings.provided.kis_app_secret,
        base_url=settings.provided.kis_base_url,
        timeout=settings.provided.vendor_timeout_seconds,
    )
    domestic_provider = providers.Singleton(KisDomesticProvider, kis_client)
    foreign_provider = providers.Selector(
        settings.provided.foreign_price_vendor,
        kis=providers.Singleton(KisOverseasProvider, kis_client),
        finnhub=providers.Singleton(
            FinnhubProvider,
            api_key=settings.provided.finnhub_api_key,
            timeout=settings.provided.vendor_timeout_seconds,
        ),
    )
    gateway = providers.Singleton(
        PriceLookupGateway,
        providers.Dict({Market.KR: domestic_provider, Market.US: foreign_provider}),
    )

    push_transport = providers.Singleton(
        FirebasePushTransport, settings.provided.firebase_service_account_key
    )
    recorder = providers.Singleton(TriggerRecorder, store)
    dispatcher = providers.Singleton(
        NotificationDispatcher,
        store,
        push_transport,
        site_url=settings.provided.site_url,
    )

    alert_checker = providers.Singleton(
        AlertCheckService,
        store,
        gateway,
        dispatcher,
        recorder,
        chunk_size=settings.provided.price_chunk_size,
        chunk_delay=settings.provided.price_chunk_delay,
    )


# Type aliases for route injection (avoid repeating Annotated[...] in every route)
AlertCheckServiceDep = Annotated[AlertCheckService, Depends(Provide[Container.alert_checker])]
SettingsDep = Annotated[Settings, Depends(Provide[Container.settings])]


def init_container() -> Container:
    """Create container and wire to router modules."""
    container = Container()
    container.wire()
    return container

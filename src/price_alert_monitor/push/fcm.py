"""Firebase Cloud Messaging push transport."""
import asyncio
import json
import logging

import firebase_admin
from firebase_admin import credentials, messaging

from price_alert_monitor.push.transport_abc import PushTransportABC
from price_alert_monitor.schemas import (DeliveryOutcome, DeliveryResult,
                                         PushMessage)

logger = logging.getLogger(__name__)

# send_each accepts at most this many messages per call.
FCM_BATCH_LIMIT = 500

# Errors meaning the token will never be deliverable again. INVALID_ARGUMENT
# is left out: FCM also returns it for a bad payload.
_INVALID_TOKEN_ERRORS: tuple[type[Exception], ...] = (
    messaging.UnregisteredError,
    messaging.SenderIdMismatchError,
)

ICON = "/icons/icon-192x192.png"
BADGE = "/icons/icon-72x72.png"


def classify_error(exc: Exception | None) -> DeliveryOutcome:
    if isinstance(exc, _INVALID_TOKEN_ERRORS):
        return DeliveryOutcome.INVALID
    return DeliveryOutcome.TRANSIENT


def build_fcm_message(message: PushMessage, token: str) -> messaging.Message:
    """FCM message for one (notification, token) pair."""
    fcm_options = None
    if message.link.startswith("https://"):
        # FCM rejects non-HTTPS webpush links.
        fcm_options = messaging.WebpushFCMOptions(link=message.link)
    return messaging.Message(
        token=token,
        notification=messaging.Notification(title=message.title, body=message.body),
        data=message.data,
        webpush=messaging.WebpushConfig(
            notification=messaging.WebpushNotification(
                icon=ICON,
                badge=BADGE,
                require_interaction=True,
                vibrate=[200, 100, 200],
            ),
            fcm_options=fcm_options,
        ),
    )


class FirebasePushTransport(PushTransportABC):
    """Sends through firebase-admin's send_each (run in a worker thread).

    The Firebase app is initialized lazily from the service account JSON so
    that a missing key only fails dispatch, not startup.
    """

    APP_NAME = "price-alert-monitor"

    def __init__(self, service_account_json: str) -> None:
        self._service_account_json = service_account_json
        self._app: firebase_admin.App | None = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        if not self._service_account_json:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not configured")
        try:
            self._app = firebase_admin.get_app(self.APP_NAME)
        except ValueError:
            cert = credentials.Certificate(json.loads(self._service_account_json))
            self._app = firebase_admin.initialize_app(cert, name=self.APP_NAME)
            logger.info("Firebase app initialized")
        return self._app

    def _send_sync(
        self, messages: list[PushMessage], tokens: list[str]
    ) -> list[DeliveryResult]:
        app = self._get_app()
        pairs = [(message, token) for message in messages for token in tokens]
        results: list[DeliveryResult] = []
        for start in range(0, len(pairs), FCM_BATCH_LIMIT):
            batch = pairs[start : start + FCM_BATCH_LIMIT]
            response = messaging.send_each(
                [build_fcm_message(message, token) for message, token in batch],
                app=app,
            )
            for (message, token), resp in zip(batch, response.responses):
                if resp.success:
                    outcome, error = DeliveryOutcome.DELIVERED, None
                else:
                    outcome, error = classify_error(resp.exception), str(resp.exception)
                results.append(
                    DeliveryResult(
                        token=token, alert_id=message.alert_id, outcome=outcome, error=error
                    )
                )
        return results

    async def send_multicast(
        self, messages: list[PushMessage], tokens: list[str]
    ) -> list[DeliveryResult]:
        if not messages or not tokens:
            return []
        return await asyncio.to_thread(self._send_sync, messages, tokens)

    async def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None

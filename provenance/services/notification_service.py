#services/notification_service
import hashlib
import hmac
import json
import logging
import queue
import threading
from datetime import datetime, timezone
from typing import Iterable, List

import requests

logger = logging.getLogger(__name__)


class NotificationSink:
    """Receives one notification per accepted registry transition"""

    def publish(self, notification) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullNotificationSink(NotificationSink):
    def publish(self, notification) -> None:
        pass


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to the ``provenance.events`` logger"""

    def __init__(self, event_logger: logging.Logger = None):
        self.event_logger = event_logger or logging.getLogger('provenance.events')

    def publish(self, notification) -> None:
        self.event_logger.info(f"EVENT: {json.dumps(notification.to_dict())}")


class MongoEventSink(NotificationSink):
    """Appends notifications to the ``registry_events`` collection"""

    def __init__(self, db):
        self.collection = db.registry_events

    def publish(self, notification) -> None:
        self.collection.insert_one({
            **notification.to_dict(),
            'created_at': datetime.now(timezone.utc)
        })


class CompositeNotificationSink(NotificationSink):
    """Fans out to several sinks; one failing sink does not starve the others"""

    def __init__(self, sinks: Iterable[NotificationSink]):
        self.sinks: List[NotificationSink] = list(sinks)

    def publish(self, notification) -> None:
        for sink in self.sinks:
            try:
                sink.publish(notification)
            except Exception as e:
                logger.error(f"{type(sink).__name__} failed to publish: {e}")

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()


def sign_payload(payload: bytes, secret: str) -> str:
    """HMAC SHA256 signature in ``sha256=<hex>`` form"""
    digest = hmac.new(secret.encode('utf-8'), payload, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


class WebhookNotificationSink(NotificationSink):
    """
    POSTs notifications as JSON to a webhook endpoint.

    Delivery runs on a single background thread fed by a FIFO queue, so
    ``publish`` never blocks the registry and notifications arrive in commit
    order. Each delivery is attempted up to ``retries`` times.
    """

    SIGNATURE_HEADER = 'X-Registry-Signature'

    def __init__(self, url: str, secret: str = None, timeout: int = 30, retries: int = 3,
                 session: requests.Session = None):
        self.url = url
        self.secret = secret
        self.timeout = timeout
        self.retries = max(int(retries), 1)
        self.session = session or requests.Session()

        self._queue = queue.Queue()
        self._worker = threading.Thread(target=self._run, name='webhook-notifier', daemon=True)
        self._worker.start()

    def publish(self, notification) -> None:
        self._queue.put(notification.to_dict())

    def flush(self) -> None:
        """Block until every queued notification has been attempted"""
        self._queue.join()

    def close(self) -> None:
        self._queue.put(None)
        self._worker.join(timeout=self.timeout)

    def _run(self):
        while True:
            payload = self._queue.get()
            try:
                if payload is None:
                    return
                self.deliver(payload)
            finally:
                self._queue.task_done()

    def deliver(self, payload: dict) -> bool:
        """Send one payload; returns True once the endpoint accepts it"""
        body = json.dumps(payload, sort_keys=True).encode('utf-8')
        headers = {'Content-Type': 'application/json'}
        if self.secret:
            headers[self.SIGNATURE_HEADER] = sign_payload(body, self.secret)

        for attempt in range(1, self.retries + 1):
            try:
                response = self.session.post(self.url, data=body, headers=headers, timeout=self.timeout)
                if response.status_code < 400:
                    return True
                logger.warning(
                    f"Webhook {payload['event_type']} attempt {attempt}/{self.retries} "
                    f"returned HTTP {response.status_code}"
                )
            except requests.RequestException as e:
                logger.warning(f"Webhook {payload['event_type']} attempt {attempt}/{self.retries} failed: {e}")

        logger.error(f"Webhook delivery of {payload['event_type']} for product {payload['product_id']} abandoned")
        return False


def build_notifier(config: dict, db=None) -> NotificationSink:
    """
    Build the sink chain named by ``NOTIFICATION_SINKS``

    Args:
        config: Flask config mapping
        db: Mongo database, required for the ``mongo`` sink

    Returns:
        A single sink (composite when more than one is configured)
    """
    names = [n.strip() for n in config.get('NOTIFICATION_SINKS', 'log').split(',') if n.strip()]
    sinks = []

    for name in names:
        if name == 'log':
            sinks.append(LoggingNotificationSink())
        elif name == 'mongo':
            if db is None:
                raise ValueError("mongo notification sink requires a database connection")
            sinks.append(MongoEventSink(db))
        elif name == 'webhook':
            if not config.get('WEBHOOK_URL'):
                raise ValueError("webhook notification sink requires WEBHOOK_URL")
            sinks.append(WebhookNotificationSink(
                url=config['WEBHOOK_URL'],
                secret=config.get('WEBHOOK_SECRET'),
                timeout=int(config.get('WEBHOOK_TIMEOUT', 30)),
                retries=int(config.get('WEBHOOK_RETRIES', 3))
            ))
        else:
            raise ValueError(f"Unknown notification sink: {name}")

    if not sinks:
        return NullNotificationSink()
    if len(sinks) == 1:
        return sinks[0]
    return CompositeNotificationSink(sinks)

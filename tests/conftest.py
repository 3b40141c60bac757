import socket

import pytest

from form_actions.config import DispatchConfig
from form_actions.dispatcher.delivery import SubmissionContext, WebhookDeliveryUnit
from form_actions.dispatcher.engine import DispatchEngine
from form_actions.dispatcher.scheduler import DispatchScheduler
from form_actions.intake.service import FormSubmissionService
from form_actions.observability.metrics import DeliveryMetrics
from form_actions.receiver.server import WebhookReceiverServer
from form_actions.storage.store import SubmissionStore
from form_actions.utils.factories import ActionConfigFactory, SubmissionFactory


@pytest.fixture
def config():
    """Real retry budget with short delays so tests stay fast."""
    return DispatchConfig(max_retries=3, retry_delay=0.01, timeout_seconds=2)


@pytest.fixture
def store():
    return SubmissionStore()


@pytest.fixture
def metrics():
    return DeliveryMetrics(window_seconds=300)


@pytest.fixture
def delivery(store, config, metrics):
    return WebhookDeliveryUnit(store, config=config, metrics=metrics)


@pytest.fixture
def engine(store, config, metrics):
    return DispatchEngine(store, config=config, metrics=metrics)


@pytest.fixture
def scheduler(engine):
    return DispatchScheduler(engine)


@pytest.fixture
def service(store, scheduler, config):
    return FormSubmissionService(store, scheduler, config=config)


@pytest.fixture
def submission(store):
    """A stored, unprocessed submission."""
    sub = SubmissionFactory.create()
    store.add_submission(sub)
    return sub


@pytest.fixture
def context(submission):
    return SubmissionContext(
        submission_id=submission.submission_id,
        title=submission.title,
        payload=submission.payload,
    )


@pytest.fixture
def receiver():
    server = WebhookReceiverServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def unused_url():
    """URL of a local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/webhook"


@pytest.fixture
def submission_factory():
    return SubmissionFactory


@pytest.fixture
def action_factory():
    return ActionConfigFactory

"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


REQUEST_COUNTER = Counter(
	"circle_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"circle_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

DOMAIN_ERRORS = Counter(
	"circle_domain_errors_total",
	"Domain errors surfaced to API callers",
	["reason"],
)

FRIEND_EVENTS = Counter(
	"circle_friend_events_total",
	"Friend request and friendship transitions",
	["event"],
)

CALL_TRANSITIONS = Counter(
	"circle_call_transitions_total",
	"Call session state transitions",
	["transition"],
)

MESSAGES_SENT = Counter(
	"circle_messages_sent_total",
	"Direct messages stored",
)

MOODS_SET = Counter(
	"circle_moods_set_total",
	"Mood writes by outcome",
	["result"],
)

POSTS_WRITTEN = Counter(
	"circle_posts_written_total",
	"Post writes by action",
	["action"],
)

SESSIONS = Counter(
	"circle_sessions_total",
	"Login session lifecycle events",
	["event"],
)

DOCSTORE_CAS_RETRIES = Counter(
	"circle_docstore_cas_retries_total",
	"Compare-and-swap writes retried after a concurrent change",
	["collection"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_domain_error(reason: str) -> None:
	DOMAIN_ERRORS.labels(reason=reason).inc()


def inc_friend_event(event: str) -> None:
	FRIEND_EVENTS.labels(event=event).inc()


def inc_call_transition(transition: str) -> None:
	CALL_TRANSITIONS.labels(transition=transition).inc()


def inc_message_sent() -> None:
	MESSAGES_SENT.inc()


def inc_mood_set(result: str) -> None:
	MOODS_SET.labels(result=result).inc()


def inc_post_written(action: str) -> None:
	POSTS_WRITTEN.labels(action=action).inc()


def inc_session(event: str) -> None:
	SESSIONS.labels(event=event).inc()


def inc_cas_retry(collection: str) -> None:
	DOCSTORE_CAS_RETRIES.labels(collection=collection).inc()

from fastapi import Request

from orderdesk.event_broker import EventBroker


def get_broker(request: Request) -> EventBroker:
    return request.app.state.broker

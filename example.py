"""Example: in-process event registry with a failing listener (logged, not raised)."""

import logging

from eventbus import EventRegistry

logging.basicConfig(level=logging.INFO)


def main() -> None:
    registry = EventRegistry("example")

    def send_welcome_email(user: dict) -> None:
        print(f"welcome email -> user {user['id']}")

    def add_to_crm(user: dict) -> None:
        raise ConnectionError("crm unavailable")

    def record_signup(user: dict) -> None:
        print(f"signup recorded -> user {user['id']}")

    registry.subscribe("user.created", send_welcome_email)
    registry.subscribe("user.created", add_to_crm)
    registry.subscribe("user.created", record_signup)

    registry.publish("user.created", {"id": 1})

    registry.unsubscribe("user.created", send_welcome_email)
    registry.publish("user.created", {"id": 2})

    print(registry.event_stats())


if __name__ == "__main__":
    main()

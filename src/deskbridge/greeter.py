"""Greeting command used by the front-end to check the bridge is wired up."""


def greet(name: str) -> str:
    return f"Hello, {name}! You've been greeted!"

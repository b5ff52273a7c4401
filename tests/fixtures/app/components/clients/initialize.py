"""Initializer of the Clients fixture component."""


class Initialize:
    @staticmethod
    def init(app):
        app.config.x.setdefault("init_calls", []).append("Clients")

    @staticmethod
    def ready(app):
        app.config.x.setdefault("ready_calls", []).append("Clients")

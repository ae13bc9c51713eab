from fastapi import Request

from config.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with (see ``main.create_app``)."""
    return request.app.state.settings

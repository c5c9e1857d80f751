from fastapi import Request

from prompt_keeper.services.library import PromptLibrary


def get_library(request: Request) -> PromptLibrary:
    """Dependency returning the library built at application startup."""
    return request.app.state.library

from .prompt_builder import build_context_annotation, build_messages  # noqa: F401

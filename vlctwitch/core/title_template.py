"""Channel title template ({title}, {game_name})."""
import string

from vlctwitch.errors import TitleTemplateError

PLACEHOLDERS = frozenset({"title", "game_name"})
MAX_TITLE_LENGTH = 140  # Twitch rejects longer stream titles


class TitleTemplate:
    """A validated str.format template. Parse once at startup, render per update."""

    def __init__(self, source: str) -> None:
        self.source = source

    @classmethod
    def parse(cls, source: str) -> "TitleTemplate":
        if not source or not source.strip():
            raise TitleTemplateError("Title template is empty")
        try:
            parsed = list(string.Formatter().parse(source))
        except ValueError as e:
            raise TitleTemplateError(f"Invalid title template {source!r}: {e}") from e
        for _, field, _, _ in parsed:
            if field is None:
                continue
            name = field.split(".")[0].split("[")[0]
            if name not in PLACEHOLDERS:
                raise TitleTemplateError(
                    f"Unknown placeholder {{{field}}} in title template; "
                    f"use {', '.join('{' + p + '}' for p in sorted(PLACEHOLDERS))}"
                )
        template = cls(source)
        template.render(title="Title", game_name="Game")  # catches bad format specs
        return template

    def render(self, title: str, game_name: str) -> str:
        try:
            text = self.source.format(title=title, game_name=game_name)
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise TitleTemplateError(f"Cannot render title template {self.source!r}: {e}") from e
        text = " ".join(text.split())[:MAX_TITLE_LENGTH]
        if not text:
            raise TitleTemplateError("Rendered channel title is empty")
        return text

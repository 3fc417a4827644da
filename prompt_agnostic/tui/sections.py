from typing import Optional, Union

from rich.console import RenderableType
from rich.panel import Panel

from prompt_agnostic.tui.enums import UIStyle, score_style


def _style(style: Union[UIStyle, str]) -> str:
    return style.value if isinstance(style, UIStyle) else style


class UISection:
    """Titled panels shared by every command."""

    @staticmethod
    def wrap(
        title: str,
        body: RenderableType,
        style: Union[UIStyle, str] = UIStyle.BLUE,
        subtitle: Optional[str] = None,
    ) -> Panel:
        return Panel(
            body,
            title=f"[bold]{title}[/bold]",
            title_align="left",
            subtitle=subtitle,
            border_style=_style(style),
            padding=(0, 1),
        )

    @staticmethod
    def scored(title: str, body: RenderableType, score: int, subtitle: Optional[str] = None) -> Panel:
        return UISection.wrap(title, body, style=score_style(score), subtitle=subtitle)

    @staticmethod
    def verdict(title: str, message: str, ok: bool) -> Panel:
        style = UIStyle.GREEN if ok else UIStyle.RED
        return Panel(message, title=title, border_style=style.value, padding=(0, 1), expand=False)

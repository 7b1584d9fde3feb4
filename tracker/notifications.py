from typing import NamedTuple

SUCCESS = "success"
WARNING = "warning"
INFO = "info"
ERROR = "error"


class BannerStyle(NamedTuple):
    icon: str
    renderer: str   # name of the streamlit call that draws the banner


BANNER_STYLES = {
    SUCCESS: BannerStyle(icon="📈", renderer="success"),
    WARNING: BannerStyle(icon="⚠️", renderer="warning"),
    INFO: BannerStyle(icon="ℹ️", renderer="info"),
    ERROR: BannerStyle(icon="🚨", renderer="error"),
}


class Notification(NamedTuple):
    kind: str
    title: str
    message: str

    @property
    def style(self) -> BannerStyle:
        return BANNER_STYLES[self.kind]


def plural(count: int, word: str, suffix: str = "s") -> str:
    return f"{count} {word}{suffix if count != 1 else ''}"

"""Release announcement text for a platform build."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from fast_cli.errors import ProjectConfigError
from fast_cli.project.config_id import normalize_name, parse_config_id
from fast_cli.project.xyx_config import PlatformConfig

logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "hnyigegame"
CHANGELOG_HEADING = "更新日志"

RESULT_TEMPLATE = """\
{{platform}} {{project_name}} v{{version}}
游戏地址: {{game_url}}
正式广告链接: {{official_advertising_link}}
测试广告链接: {{test_advertising_link}}
包下载地址: {{package_download_address}}
{{changelog}}"""

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


@dataclass(frozen=True)
class ReleaseLinks:
    official_advertising_link: str
    test_advertising_link: str
    package_download_address: str
    game_url: str
    cy_project_name: str


def build_links(config_id: str, online_url: str, version_name: str) -> ReleaseLinks:
    """Derive the advertising, game and package links of a release.

    The publisher part of the config id selects the advertising host
    (``<publisher>game``, falling back to ``hnyigegame``). The project name
    is the directory of the online URL's path.

    Example:
        >>> links = build_links("vivo@main#acme", "https://h5.acme.com/Jump/index.html", "1.0.2")
        >>> links.official_advertising_link
        'http://twww.acmegame.com/h5games/acmegame/Jump/index.html?env=pre'

    """
    publisher = parse_config_id(config_id).publisher
    hostname = f"{publisher}game" if publisher else DEFAULT_HOSTNAME
    host = f"http://twww.{hostname}.com/h5games/{hostname}"

    url = urlsplit(online_url)
    cy_project_name = str(PurePosixPath(url.path or "/").parent).lstrip("/")

    page = "/".join(part for part in (host, cy_project_name, "index.html") if part)
    return ReleaseLinks(
        official_advertising_link=f"{page}?env=pre",
        test_advertising_link=f"{page}?env=pre&ad_env=preview",
        package_download_address=(
            f"{normalize_name(config_id)}-{cy_project_name.lower()}-{version_name}.zip"
        ),
        game_url=online_url,
        cy_project_name=cy_project_name,
    )


def format_changelog(text: str) -> str:
    """Prefix a changelog with its heading unless it already carries one."""
    text = text.strip()
    if CHANGELOG_HEADING in text:
        return text
    return f"{CHANGELOG_HEADING}: \n{text}"


def render(context: dict[str, str | None], template: str = RESULT_TEMPLATE) -> str:
    """Replace ``{{key}}`` placeholders; unknown or empty values render as ''."""
    return _PLACEHOLDER.sub(lambda m: context.get(m.group(1)) or "", template).rstrip()


def render_release(
    config_id: str, platform: PlatformConfig, changelog: str | None = None
) -> str:
    """Render the release announcement of a platform build.

    Raises:
        ProjectConfigError: If the platform has no ``online_url``

    """
    if not platform.online_url:
        raise ProjectConfigError(f"configId {config_id} has no online_url")

    links = build_links(config_id, platform.online_url, platform.version_name)
    context: dict[str, str | None] = {
        **asdict(links),
        "project_name": platform.project_name,
        "platform": f"[{config_id}]",
        "version": platform.version_name,
        "changelog": changelog,
    }
    logger.debug("Render context: %s", context)
    return render(context)

"""Process entry point: ``python -m src.toggly`` or ``toggly-server``."""

import uvicorn

from src.toggly.core.config import get_settings

BANNER = r"""
::::::::::: ::::::::   ::::::::   ::::::::  :::     :::   :::
    :+:    :+:    :+: :+:    :+: :+:    :+: :+:     :+:   :+:
    +:+    +:+    +:+ +:+        +:+        +:+      +:+ +:+
    +#+    +#+    +:+ :#:        :#:        +#+       +#++:
    +#+    +#+    +#+ +#+   +#+# +#+   +#+# +#+        +#+
    #+#    #+#    #+# #+#    #+# #+#    #+# #+#        #+#
    ###     ########   ########   ########  ########## ###
"""
BANNER_WIDTH = 63


def banner(version: str) -> str:
    lines = [
        BANNER,
        "-= Core API Server =-".center(BANNER_WIDTH).rstrip(),
        f"ver: {version}".center(BANNER_WIDTH).rstrip(),
        "-" * (BANNER_WIDTH - 1),
        "",
    ]
    return "\n".join(lines)


def main() -> None:
    settings = get_settings()
    print(banner(settings.app_version))
    uvicorn.run(
        "src.toggly.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Dota 2 Team Tracker Server

Keeps an in-memory snapshot of OpenDota team data and the Liquipedia match
schedule for the configured teams, and serves it to the dashboard.

Usage:
    python serve.py           # Run the dashboard server
    python serve.py --once    # Refresh once and print the snapshot JSON
"""

from __future__ import annotations

import json
import logging
import sys

from dota_tracker.config import ConfigError, load_settings, load_teams
from dota_tracker.images import ImageProxy
from dota_tracker.notify import RefreshAlerter
from dota_tracker.opendota import OpenDotaClient
from dota_tracker.players import PlayerHeroCache
from dota_tracker.refresh import Refresher
from dota_tracker.scheduler import RefreshScheduler
from dota_tracker.server import create_app

log = logging.getLogger("dota_tracker")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    run_once = "--once" in sys.argv

    try:
        settings = load_settings()
        teams = load_teams(settings.teams_path)
    except ConfigError as e:
        log.error(f"Cannot start: {e}")
        return 1

    client = OpenDotaClient(api_key=settings.api_key, base_url=settings.api_base)
    refresher = Refresher(client, teams, alerter=RefreshAlerter())

    if run_once:
        if not refresher.refresh_all():
            return 1
        json.dump(refresher.snapshot.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return 0

    app = create_app(
        settings,
        refresher,
        PlayerHeroCache(client, ttl=settings.player_hero_ttl),
        ImageProxy(ttl=settings.image_ttl),
    )
    scheduler = RefreshScheduler(
        refresher,
        refresh_interval=settings.refresh_interval,
        live_interval=settings.live_refresh_interval,
    )

    log.info("=" * 50)
    log.info("Dota 2 Tracker: starting server")
    log.info(f"Tracking: {', '.join(t.tag for t in teams)}")
    log.info(f"Full refresh: every {settings.refresh_interval / 60:.0f} min")
    log.info(f"Live refresh: every {settings.live_refresh_interval:.0f}s")
    log.info(f"OpenDota API key: {'set' if settings.api_key else 'not set'}")
    log.info(f"Server: http://localhost:{settings.port}")
    log.info("=" * 50)

    scheduler.start()
    try:
        # use_reloader=False: the reloader would start a second scheduler
        app.run(host=settings.host, port=settings.port, debug=settings.debug, threaded=True, use_reloader=False)
    except OSError as e:
        log.error(f"Cannot start server: {e}")
        return 1
    finally:
        scheduler.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())

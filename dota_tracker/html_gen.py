"""Dashboard page shell: tabs, styles and the mount points app.js renders into."""

from __future__ import annotations

import json
from html import escape

from dota_tracker import TeamConfig


def generate_index_html(teams: list[TeamConfig]) -> str:
    """Generate the index HTML page.

    The page is static apart from the team tabs. All data is fetched by
    /app.js from /api/data after load.
    """
    teams_json = json.dumps({t.key: {"id": t.id, "name": t.name, "tag": t.tag} for t in teams})
    tabs = "\n".join(
        f'        <button class="tab-btn" data-view="{escape(t.key)}">{escape(t.tag)}</button>'
        for t in teams
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Dota 2 Team Tracker</title>
    <style>
        * {{ box-sizing: border-box; margin: 0; padding: 0; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 1.5rem;
            background: #0f0f1a;
            color: #e0e0e0;
            line-height: 1.5;
        }}
        h1 {{ color: #fff; font-size: 1.75rem; }}
        a {{ color: #7dd3fc; text-decoration: none; }}
        .text-muted {{ color: #777; }}
        .text-win {{ color: #4ade80; }}
        .text-loss {{ color: #f87171; }}
        .section-title {{ color: #ccc; margin: 1.5rem 0 0.75rem; font-size: 1.2rem; }}
        .fade-in {{ animation: fade 0.25s ease-in; }}
        @keyframes fade {{ from {{ opacity: 0; }} to {{ opacity: 1; }} }}

        /* Header & tabs */
        .top-bar {{ display: flex; align-items: center; justify-content: space-between; flex-wrap: wrap; gap: 1rem; }}
        .tabs {{ display: flex; gap: 0.5rem; }}
        .tab-btn {{
            background: #1a1a2e;
            color: #e0e0e0;
            border: 2px solid #2a2a4a;
            border-radius: 6px;
            padding: 0.4rem 1rem;
            font-weight: 600;
            cursor: pointer;
        }}
        .tab-btn:hover, .tab-btn.tab-active {{ border-color: #7dd3fc; background: #16213e; }}

        /* Loading */
        #loading-overlay {{
            position: fixed; inset: 0;
            display: none; align-items: center; justify-content: center; flex-direction: column; gap: 1rem;
            background: rgba(15, 15, 26, 0.95);
            z-index: 10;
        }}
        .spinner, .spinner-sm {{
            border: 3px solid #2a2a4a;
            border-top-color: #7dd3fc;
            border-radius: 50%;
            animation: spin 0.8s linear infinite;
        }}
        .spinner {{ width: 40px; height: 40px; }}
        .spinner-sm {{ width: 14px; height: 14px; border-width: 2px; display: inline-block; }}
        @keyframes spin {{ to {{ transform: rotate(360deg); }} }}
        .error-box {{ background: #3a1010; color: #fca5a5; padding: 1rem; border-radius: 8px; margin: 1rem 0; }}

        /* Live banner */
        .live-banner {{
            display: flex; align-items: center; gap: 0.75rem; flex-wrap: wrap;
            background: #2a0f14; border: 1px solid #7f1d1d; border-radius: 8px;
            padding: 0.6rem 1rem; margin: 1rem 0;
        }}
        .live-indicator {{ width: 10px; height: 10px; border-radius: 50%; background: #ef4444; animation: pulse 1.2s infinite; }}
        @keyframes pulse {{ 50% {{ opacity: 0.3; }} }}
        .live-label {{ color: #ef4444; font-weight: 700; }}
        .live-matches-list {{ display: flex; gap: 1.5rem; flex-wrap: wrap; }}
        .live-match-item {{ display: flex; gap: 0.5rem; align-items: center; }}
        .live-score {{ font-weight: 700; color: #fff; }}
        .live-time {{ color: #999; font-size: 0.85rem; }}

        /* Cards */
        .overview-grid, .upcoming-grid, .ongoing-grid {{
            display: grid; grid-template-columns: repeat(auto-fill, minmax(300px, 1fr)); gap: 1rem;
        }}
        .team-card, .upcoming-card, .ongoing-card {{
            background: #1a1a2e; border: 2px solid #2a2a4a; border-radius: 8px; padding: 1rem;
        }}
        .team-card {{ cursor: pointer; transition: border-color 0.2s; }}
        .team-card:hover {{ border-color: #7dd3fc; }}
        .card-header {{ display: flex; align-items: center; gap: 0.75rem; }}
        .team-logo {{ width: 48px; height: 48px; object-fit: contain; }}
        .team-logo-lg {{ width: 96px; height: 96px; object-fit: contain; }}
        .team-logo-placeholder {{
            width: 48px; height: 48px; border-radius: 8px; background: #2a2a4a;
            display: flex; align-items: center; justify-content: center; font-weight: 700;
        }}
        .team-logo-placeholder.lg {{ width: 96px; height: 96px; font-size: 1.5rem; }}
        .team-tag {{ color: #888; font-size: 0.85rem; }}
        .card-stats {{ display: flex; justify-content: space-between; margin: 1rem 0 0.5rem; }}
        .stat-block {{ display: flex; flex-direction: column; align-items: center; }}
        .stat-value {{ font-size: 1.3rem; font-weight: 700; color: #fff; }}
        .stat-label {{ font-size: 0.75rem; color: #888; text-transform: uppercase; }}
        .win-rate-bar, .wr-bar-track {{ height: 6px; background: #3a1a1a; border-radius: 3px; overflow: hidden; }}
        .win-rate-fill, .wr-bar-fill {{ height: 100%; background: #4ade80; }}
        .recent-form {{ margin-top: 0.75rem; display: flex; align-items: center; gap: 0.5rem; }}
        .form-label {{ font-size: 0.75rem; color: #888; }}
        .form-dots {{ display: flex; gap: 0.3rem; }}
        .form-dot {{ font-size: 0.7rem; padding: 0.1rem 0.35rem; border-radius: 4px; font-weight: 700; }}
        .form-dot.win {{ background: #14532d; color: #4ade80; }}
        .form-dot.loss {{ background: #4c1d1d; color: #f87171; }}

        .upcoming-teams {{ display: flex; align-items: center; justify-content: space-between; gap: 0.5rem; }}
        .upcoming-team-block {{ display: flex; align-items: center; gap: 0.4rem; }}
        .upcoming-team-block.ours .upcoming-team-name {{ color: #7dd3fc; }}
        .upcoming-logo {{ width: 28px; height: 28px; object-fit: contain; }}
        .upcoming-vs {{ color: #666; }}
        .upcoming-meta {{ margin-top: 0.5rem; display: flex; gap: 0.5rem; font-size: 0.85rem; color: #aaa; }}
        .upcoming-bo {{ background: #1e3a5f; color: #7dd3fc; padding: 0 0.4rem; border-radius: 4px; font-weight: 600; }}
        .upcoming-time {{ margin-top: 0.25rem; font-size: 0.85rem; }}

        .ongoing-header {{ display: flex; justify-content: space-between; margin-bottom: 0.5rem; }}
        .ongoing-name {{ font-weight: 600; }}
        .ongoing-ago {{ color: #888; font-size: 0.8rem; }}
        .ongoing-team-row {{ display: flex; gap: 0.75rem; font-size: 0.9rem; }}
        .ongoing-team-tag {{ font-weight: 700; color: #7dd3fc; cursor: pointer; }}
        .ongoing-last {{ color: #aaa; }}

        /* Team dashboard */
        .team-header {{ display: flex; gap: 1.5rem; align-items: center; margin: 1rem 0; }}
        .team-header-meta {{ display: flex; gap: 0.5rem; margin: 0.5rem 0; }}
        .meta-badge {{ background: #1a1a2e; padding: 0.2rem 0.6rem; border-radius: 4px; font-size: 0.85rem; }}
        .wr-bar-wrap {{ display: flex; align-items: center; gap: 0.75rem; }}
        .wr-bar-track {{ width: 240px; }}
        .wr-label {{ font-size: 0.85rem; color: #aaa; }}

        .table-wrap {{ overflow-x: auto; }}
        table {{ width: 100%; border-collapse: collapse; }}
        th, td {{ padding: 0.6rem 0.75rem; text-align: left; border-bottom: 1px solid #222; }}
        th {{ background: #1a1a2e; color: #999; font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.05em; }}
        .player-row {{ cursor: pointer; }}
        .player-row:hover, .player-row.expanded {{ background: #16213e; }}
        .player-expand-icon, .series-chevron {{ display: inline-block; font-size: 0.7rem; transition: transform 0.2s; color: #666; }}
        .expanded .player-expand-icon, .expanded .series-chevron {{ transform: rotate(90deg); }}
        .player-heroes-row td {{ padding: 0; border: none; }}
        .player-heroes-container {{ display: none; }}
        .player-heroes-container.open {{ display: block; padding: 0.5rem 0.75rem; }}
        .player-heroes-grid {{ display: flex; flex-wrap: wrap; gap: 0.5rem; }}
        .player-hero-item {{ display: flex; align-items: center; gap: 0.4rem; background: #1a1a2e; border-radius: 6px; padding: 0.25rem 0.5rem; }}
        .player-hero-img {{ width: 48px; height: 27px; object-fit: cover; border-radius: 3px; }}
        .player-hero-info {{ display: flex; flex-direction: column; font-size: 0.8rem; }}
        .player-hero-stats {{ color: #888; }}
        .last-hero-icon {{ width: 28px; height: 28px; }}
        .roster-hint {{ color: #666; font-size: 0.8rem; margin-top: 0.4rem; }}

        .league-block {{ background: #1a1a2e; border-radius: 8px; padding: 0.75rem 1rem; margin-bottom: 1rem; }}
        .league-header {{ display: flex; justify-content: space-between; align-items: baseline; flex-wrap: wrap; }}
        .league-name-title {{ font-size: 1rem; color: #fff; }}
        .league-meta {{ display: flex; gap: 1rem; font-size: 0.8rem; color: #999; }}
        .series-row {{
            display: grid; grid-template-columns: 20px 1fr 50px 50px 60px 90px; gap: 0.5rem; align-items: center;
            padding: 0.45rem 0.25rem; border-bottom: 1px solid #222; cursor: pointer;
        }}
        .series-row:hover, .series-row.expanded {{ background: #16213e; }}
        .series-bo {{ color: #888; font-size: 0.8rem; }}
        .series-score {{ font-weight: 700; }}
        .series-time {{ color: #888; font-size: 0.8rem; text-align: right; }}
        .series-games {{ display: none; padding: 0.25rem 0 0.5rem 1.5rem; }}
        .series-games.open {{ display: block; }}
        .game-detail {{ display: grid; grid-template-columns: 70px 80px 60px 60px 1fr; gap: 0.5rem; font-size: 0.85rem; padding: 0.15rem 0; }}
        .badge-win, .badge-loss, .game-badge, .series-result-badge {{
            display: inline-block; padding: 0.05rem 0.45rem; border-radius: 9999px; font-size: 0.7rem; font-weight: 700;
        }}
        .badge-win {{ background: #14532d; color: #4ade80; }}
        .badge-loss {{ background: #4c1d1d; color: #f87171; }}

        .hero-grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); gap: 0.75rem; }}
        .hero-card {{ position: relative; border-radius: 8px; overflow: hidden; background: #1a1a2e; min-height: 90px; }}
        .hero-img {{ width: 100%; display: block; }}
        .hero-img-placeholder {{ height: 90px; }}
        .hero-overlay {{ position: absolute; bottom: 0; left: 0; right: 0; padding: 0.3rem 0.5rem; background: rgba(0, 0, 0, 0.7); }}
        .hero-name {{ font-weight: 600; font-size: 0.85rem; }}
        .hero-stat {{ font-size: 0.75rem; color: #bbb; }}

        .footer, #last-updated {{ margin-top: 2rem; color: #666; font-size: 0.8rem; }}

        @media (max-width: 600px) {{
            body {{ padding: 1rem; }}
            th, td {{ padding: 0.4rem; font-size: 0.85rem; }}
            .series-row {{ grid-template-columns: 16px 1fr 40px 40px 50px; }}
            .series-time {{ display: none; }}
        }}
    </style>
</head>
<body>
    <div id="loading-overlay">
        <div class="spinner"></div>
        <div class="loading-text">Loading data...</div>
    </div>

    <div class="top-bar">
        <h1>Dota 2 Team Tracker</h1>
        <nav class="tabs">
        <button class="tab-btn" data-view="overview">Overview</button>
{tabs}
        </nav>
    </div>

    <div id="live-banner"></div>
    <main id="content"></main>

    <div class="footer">
        <p>Data from <a href="https://www.opendota.com" target="_blank" rel="noopener">OpenDota</a>
           and <a href="https://liquipedia.net/dota2" target="_blank" rel="noopener">Liquipedia</a>.
           Subscribe to upcoming matches: <a href="/api/upcoming.ics">calendar feed</a>.</p>
    </div>

    <script>const TEAMS = {teams_json};</script>
    <script src="/app.js"></script>
</body>
</html>"""

"""Built-in sample data for ``--fixtures`` mode and tests.

Shapes match the normalized provider output (see ``rinkside.provider``).
"""
from __future__ import annotations

from datetime import date
from typing import Any

TEAMS = [
    # abbrev, name, conference, division, gp, w, l, otl
    ("TOR", "Maple Leafs", "Eastern", "Atlantic", 40, 24, 12, 4),
    ("BOS", "Bruins", "Eastern", "Atlantic", 40, 22, 13, 5),
    ("NYR", "Rangers", "Eastern", "Metropolitan", 40, 26, 11, 3),
    ("PIT", "Penguins", "Eastern", "Metropolitan", 40, 18, 17, 5),
    ("COL", "Avalanche", "Western", "Central", 40, 25, 12, 3),
    ("DAL", "Stars", "Western", "Central", 40, 23, 12, 5),
    ("EDM", "Oilers", "Western", "Pacific", 40, 24, 14, 2),
    ("VAN", "Canucks", "Western", "Pacific", 40, 27, 10, 3),
]

MATCHUPS = [("TOR", "BOS"), ("NYR", "PIT"), ("COL", "DAL"), ("EDM", "VAN")]

PLAYERS = {
    8478402: ("Connor McDavid", "EDM", "C", 97),
    8477934: ("Leon Draisaitl", "EDM", "C", 29),
    8479318: ("Auston Matthews", "TOR", "C", 34),
    8478483: ("Mitch Marner", "TOR", "R", 16),
    8477492: ("Nathan MacKinnon", "COL", "C", 29),
    8480069: ("Cale Makar", "COL", "D", 8),
}


def standings() -> list[dict[str, Any]]:
    return [
        {"abbrev": a, "name": n, "conference": c, "division": d,
         "gp": gp, "w": w, "l": l, "otl": otl, "pts": 2 * w + otl}
        for a, n, c, d, gp, w, l, otl in TEAMS
    ]


def game_id_for(day: date, index: int) -> int:
    return int(day.strftime("%Y%m%d")) * 10 + index


def schedule_for(day: date) -> dict[str, Any]:
    games = []
    past = day < date.today()
    for i, (away, home) in enumerate(MATCHUPS):
        games.append({
            "id": game_id_for(day, i),
            "away": away,
            "home": home,
            "away_score": (i + 2) % 5 if past else None,
            "home_score": (i + 3) % 4 if past else None,
            "state": "FINAL" if past else "FUT",
            "start_time": f"{day.isoformat()}T{23 + i % 2:02d}:00:00Z",
        })
    return {"date": day.isoformat(), "games": games}


def roster_for(abbrev: str) -> dict[str, Any]:
    skaters = [
        {"id": pid, "name": name, "pos": pos, "gp": 40, "g": 10 + pid % 20, "a": 15 + pid % 17,
         "pts": 25 + pid % 20 + pid % 17}
        for pid, (name, team, pos, _num) in PLAYERS.items() if team == abbrev
    ]
    return {"abbrev": abbrev, "skaters": skaters, "goalies": []}


def player_for(player_id: int) -> dict[str, Any] | None:
    if player_id not in PLAYERS:
        return None
    name, team, pos, num = PLAYERS[player_id]
    return {
        "id": player_id, "name": name, "team": team, "position": pos, "number": num,
        "seasons": [
            {"season": 20222023, "team": team, "gp": 82, "g": 40, "a": 60, "pts": 100},
            {"season": 20232024, "team": team, "gp": 80, "g": 38, "a": 62, "pts": 100},
        ],
    }


def boxscore_for(game_id: int, away: str, home: str) -> dict[str, Any]:
    def side(abbrev: str) -> dict[str, Any]:
        return {"abbrev": abbrev, "skaters": [
            {"id": s["id"], "name": s["name"], "pos": s["pos"], "g": 1, "a": 0, "pts": 1}
            for s in roster_for(abbrev)["skaters"]
        ]}
    return {"id": game_id, "away": side(away), "home": side(home)}


def sample_data(today: date | None = None) -> dict[str, Any]:
    today = today or date.today()
    schedule = schedule_for(today)
    games = {}
    boxscores = {}
    for g in schedule["games"]:
        games[g["id"]] = {"id": g["id"], "state": g["state"], "period": None, "clock": "",
                          "away_score": g["away_score"], "home_score": g["home_score"]}
        boxscores[g["id"]] = boxscore_for(g["id"], g["away"], g["home"])
    return {
        "standings": standings(),
        "schedules": {today.isoformat(): schedule},
        "games": games,
        "boxscores": boxscores,
        "rosters": {t[0]: roster_for(t[0]) for t in TEAMS},
        "players": {pid: player_for(pid) for pid in PLAYERS},
    }

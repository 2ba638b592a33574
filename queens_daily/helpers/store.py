"""
Supabase persistence for solve times.

Every call degrades to a no-op when SUPABASE_URL / SUPABASE_KEY are unset
or the REST endpoint fails.
"""

import logging

import requests

from .. import config

logger = logging.getLogger(__name__)


def is_configured():
    return bool(config.SUPABASE_URL and config.SUPABASE_KEY)


def supabase_headers():
    return {
        "apikey": config.SUPABASE_KEY,
        "Authorization": f"Bearer {config.SUPABASE_KEY}",
        "Content-Type": "application/json",
        "Prefer": "return=representation",
    }


def record_solve_time(puzzle_id, solve_time):
    """
    Store one solve time for a puzzle.

    Args:
        puzzle_id (int | str): Puzzle key (the generation seed).
        solve_time (float): Time in seconds.

    Returns:
        bool: True if the row was stored.
    """
    if not is_configured():
        logger.debug("Supabase env vars missing; skipping time log.")
        return False

    url = f"{config.SUPABASE_URL}/rest/v1/{config.TIMES_TABLE}"
    row = {"puzzle_id": str(puzzle_id), "solve_time": float(solve_time)}
    try:
        resp = requests.post(url, headers=supabase_headers(), json=row,
                             timeout=config.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("Failed to save solve time: %s", e)
        return False

    if not resp.ok:
        logger.warning("Error saving solve time: %s %s", resp.status_code, resp.text)
        return False
    return True


def get_global_average_time(puzzle_id=None):
    """
    Average solve time in seconds, rounded to 2 places.

    Args:
        puzzle_id (int | str | None): Restrict to one puzzle when given.

    Returns:
        float | str: the average, or "N/A" when there is no data.
    """
    if not is_configured():
        return "N/A"

    url = f"{config.SUPABASE_URL}/rest/v1/{config.TIMES_TABLE}"
    params = {"select": "solve_time"}
    if puzzle_id is not None:
        params["puzzle_id"] = f"eq.{puzzle_id}"
    try:
        resp = requests.get(url, headers=supabase_headers(), params=params,
                            timeout=config.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("Failed to load solve times: %s", e)
        return "N/A"

    if not resp.ok:
        logger.warning("Error loading times: %s", resp.text)
        return "N/A"

    try:
        times = [float(r["solve_time"]) for r in resp.json()]
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("Unexpected solve time payload: %s", e)
        return "N/A"
    return round(sum(times) / len(times), 2) if times else "N/A"

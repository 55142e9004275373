"""Day-keyed meal log operations.

Every function here is pure: it takes the current ``logs`` mapping and
returns a new one, leaving the input untouched. Only the affected day's
``DailyLog`` is replaced; the other entries are shared.
"""

import time
from datetime import date, datetime, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutri_coach.domain.meals import DailyLog, DailyTotals, DaySummary, Meal, MealDraft
from nutri_coach.domain.profile import NutritionTargets

Logs = dict[str, DailyLog]

DATE_KEY_FORMAT = "%Y-%m-%d"
HISTORY_DAYS = 7


def new_meal_id() -> str:
    """Return a fresh meal id that is unique across the store."""
    return uuid4().hex


def now_millis() -> int:
    """Return the current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def today_key(timezone_name: str | None = None) -> str:
    """Return today's date key in the given zone, or the local one."""
    if timezone_name:
        return datetime.now(tz=ZoneInfo(timezone_name)).strftime(DATE_KEY_FORMAT)
    return date.today().strftime(DATE_KEY_FORMAT)


def add_meal(
    logs: Logs, date_key: str, draft: MealDraft, *, meal_id: str, timestamp: int
) -> Logs:
    """Append a meal to the day's log, creating the log if needed."""
    day = logs.get(date_key) or DailyLog(date=date_key)
    meal = Meal(
        id=meal_id,
        timestamp=timestamp,
        name=draft.name,
        calories=draft.calories,
        protein=draft.protein,
        carbs=draft.carbs,
        fat=draft.fat,
    )
    return {**logs, date_key: DailyLog(date=date_key, meals=(*day.meals, meal))}


def update_meal(logs: Logs, date_key: str, meal_id: str, draft: MealDraft) -> Logs:
    """Replace a meal's nutritional fields, keeping its id and timestamp.

    Unknown dates or ids leave ``logs`` unchanged.
    """
    day = logs.get(date_key)
    if day is None or not any(meal.id == meal_id for meal in day.meals):
        return logs
    meals = tuple(
        Meal(
            id=meal.id,
            timestamp=meal.timestamp,
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
        )
        if meal.id == meal_id
        else meal
        for meal in day.meals
    )
    return {**logs, date_key: DailyLog(date=date_key, meals=meals)}


def remove_meal(logs: Logs, date_key: str, meal_id: str) -> Logs:
    """Drop a meal from the day's log. Missing dates or ids are ignored."""
    day = logs.get(date_key)
    if day is None or not any(meal.id == meal_id for meal in day.meals):
        return logs
    meals = tuple(meal for meal in day.meals if meal.id != meal_id)
    return {**logs, date_key: DailyLog(date=date_key, meals=meals)}


def find_meal(logs: Logs, date_key: str, meal_id: str) -> Meal | None:
    """Return the meal with the given id on a day, if present."""
    day = logs.get(date_key)
    if day is None:
        return None
    for meal in day.meals:
        if meal.id == meal_id:
            return meal
    return None


def daily_totals(log: DailyLog | None) -> DailyTotals:
    """Sum macros across a day's meals."""
    total = DailyTotals(calories=0.0, protein=0.0, carbs=0.0, fat=0.0)
    if log is None:
        return total
    for meal in log.meals:
        total = DailyTotals(
            calories=total.calories + meal.calories,
            protein=total.protein + meal.protein,
            carbs=total.carbs + meal.carbs,
            fat=total.fat + meal.fat,
        )
    return total


def remaining_calories(targets: NutritionTargets, totals: DailyTotals) -> float:
    """Return calories left for the day, never below zero."""
    return max(0.0, targets.target_calories - totals.calories)


def history(logs: Logs, limit: int = HISTORY_DAYS) -> list[DaySummary]:
    """Return the most recent logged days in ascending date order."""
    keys = sorted(logs)[-limit:] if limit > 0 else []
    return [
        DaySummary(
            date=key,
            totals=daily_totals(logs[key]),
            meal_count=len(logs[key].meals),
        )
        for key in keys
    ]


def compute_streak(logs: Logs, today: str) -> int:
    """Count consecutive days with at least one meal, ending today.

    A day without meals yet does not break the streak until it is over,
    so counting starts from yesterday when today is still empty.
    """
    current = datetime.strptime(today, DATE_KEY_FORMAT).date()
    if not _has_meals(logs, current):
        current -= timedelta(days=1)
    streak = 0
    while _has_meals(logs, current):
        streak += 1
        current -= timedelta(days=1)
    return streak


def _has_meals(logs: Logs, day: date) -> bool:
    log = logs.get(day.strftime(DATE_KEY_FORMAT))
    return log is not None and bool(log.meals)

"""Pure pattern computations: histograms, window scoring and heatmap buckets.

Nothing here touches storage or the clock; the tracker passes in the event
list, the current time and the stored hourly/daily patterns.
"""

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
DAY_LABELS = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']

# An hour above this share of the peak hour disqualifies a window
HIGH_ACTIVITY_FRACTION = 0.3
MAX_RECOMMENDATIONS = 5
# Confidence is measured against a fixed 2-hour baseline for every duration
CONFIDENCE_BASELINE_HOURS = 2

# (start_hour, end_hour, confidence)
DEFAULT_WINDOWS = (
    (2, 4, 70),
    (3, 5, 65),
    (1, 3, 60),
)


class InvalidDurationError(ValueError):
    """Raised for a maintenance duration outside 1-24 whole hours."""


def validate_duration(duration_hours):
    """Return duration_hours if it is an int in 1..24, raise otherwise."""
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, int):
        raise InvalidDurationError(f"duration_hours must be an integer, got {duration_hours!r}")
    if not 1 <= duration_hours <= HOURS_PER_DAY:
        raise InvalidDurationError(f"duration_hours must be between 1 and {HOURS_PER_DAY}, got {duration_hours}")
    return duration_hours


def _bucket(value, size):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 0 <= value < size else None


def compute_metrics(events, now, pattern_days=7):
    """Fold the event log into an ActivityMetrics dict stamped with ``now``.

    Only events newer than ``pattern_days`` feed the hourly/daily histograms.
    Peak and low hours take the first index on ties.
    """
    one_day_ago = now - MS_PER_DAY
    week_ago = now - 7 * MS_PER_DAY
    window_start = now - pattern_days * MS_PER_DAY

    hourly = [0] * HOURS_PER_DAY
    daily = [0] * DAYS_PER_WEEK
    last_24_hours = 0
    last_7_days = 0

    for event in events:
        timestamp = event.get('timestamp', 0)
        if timestamp > one_day_ago:
            last_24_hours += 1
        if timestamp > week_ago:
            last_7_days += 1
        if timestamp <= window_start:
            continue

        hour = _bucket(event.get('hour_of_day'), HOURS_PER_DAY)
        day = _bucket(event.get('day_of_week'), DAYS_PER_WEEK)
        if hour is not None:
            hourly[hour] += 1
        if day is not None:
            daily[day] += 1

    return {
        'total_activities': len(events),
        'last_24_hours': last_24_hours,
        'last_7_days': last_7_days,
        'hourly_pattern': hourly,
        'daily_pattern': daily,
        'peak_hour': hourly.index(max(hourly)),
        'low_activity_hour': hourly.index(min(hourly)),
        'last_updated': now,
    }


def format_hour(hour):
    """12-hour clock label, e.g. 0 -> '12:00 AM', 13 -> '1:00 PM'."""
    period = 'PM' if hour >= 12 else 'AM'
    if hour == 0:
        display = 12
    elif hour > 12:
        display = hour - 12
    else:
        display = hour
    return f"{display}:00 {period}"


def describe_window(start_hour, duration_hours):
    end_hour = (start_hour + duration_hours) % HOURS_PER_DAY
    return f"{format_hour(start_hour)} - {format_hour(end_hour)}"


def calculate_confidence(window_activity, hourly_pattern):
    """Confidence score (0-100) for a window with ``window_activity`` events."""
    average_activity = sum(hourly_pattern) / HOURS_PER_DAY
    if average_activity == 0:
        return 50.0

    activity_ratio = window_activity / (average_activity * CONFIDENCE_BASELINE_HOURS)
    return max(0.0, min(100.0, (1 - activity_ratio) * 100))


def default_windows():
    """Fixed recommendations used before any activity has been recorded."""
    return [
        {
            'start_hour': start,
            'end_hour': end,
            'estimated_activity': 0,
            'confidence': confidence,
            'description': f"{describe_window(start, end - start)} (Default low-activity period)",
        }
        for start, end, confidence in DEFAULT_WINDOWS
    ]


def rank_windows(hourly_pattern, duration_hours):
    """Rank viable start hours by summed activity, then by confidence.

    A window is viable only if no hour inside it exceeds
    HIGH_ACTIVITY_FRACTION of the busiest hour.
    """
    threshold = max(hourly_pattern) * HIGH_ACTIVITY_FRACTION
    recommendations = []

    for start_hour in range(HOURS_PER_DAY):
        span = [(start_hour + i) % HOURS_PER_DAY for i in range(duration_hours)]
        if any(hourly_pattern[hour] > threshold for hour in span):
            continue

        total_activity = sum(hourly_pattern[hour] for hour in span)
        recommendations.append({
            'start_hour': start_hour,
            'end_hour': (start_hour + duration_hours) % HOURS_PER_DAY,
            'estimated_activity': total_activity,
            'confidence': calculate_confidence(total_activity, hourly_pattern),
            'description': describe_window(start_hour, duration_hours),
        })

    recommendations.sort(key=lambda w: (w['estimated_activity'], -w['confidence']))
    return recommendations[:MAX_RECOMMENDATIONS]


def intensity(activity, max_activity):
    return (activity / max_activity) * 100 if max_activity > 0 else 0


def intensity_level(value):
    """Heatmap band for an intensity value."""
    if value < 20:
        return 'low'
    if value < 50:
        return 'moderate'
    if value < 80:
        return 'high'
    return 'very-high'


def confidence_level(confidence):
    if confidence >= 80:
        return 'high'
    if confidence >= 60:
        return 'medium'
    return 'low'


def build_heatmap(hourly_pattern, daily_pattern):
    """Normalize each series against its own maximum."""
    max_hourly = max(hourly_pattern)
    max_daily = max(daily_pattern)

    hourly = []
    for hour, activity in enumerate(hourly_pattern):
        value = intensity(activity, max_hourly)
        hourly.append({
            'hour': hour,
            'activity': activity,
            'intensity': value,
            'label': f"{hour}:00",
            'level': intensity_level(value),
        })

    daily = []
    for day, activity in enumerate(daily_pattern):
        value = intensity(activity, max_daily)
        daily.append({
            'day': day,
            'activity': activity,
            'intensity': value,
            'label': DAY_LABELS[day],
            'level': intensity_level(value),
        })

    return {'hourly': hourly, 'daily': daily}

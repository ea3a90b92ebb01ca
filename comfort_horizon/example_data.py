"""
Example data generator for the Comfort Horizon Viewer.

Writes one synthetic sensor feed covering the four comfort categories
with two or three fields each, sampled every 15 minutes over two days.
Daily cycles drive the values; a little noise rides on top.

The feed also exercises the edge cases the chart handles:

- ~3% of value cells blank or ``NaN`` (gaps in the bands)
- one field whose ``id`` sequence jumps halfway through (only the first
  run is drawn)
- night-time zero readings for illuminance (no band drawn)
"""

import math
import os
from datetime import datetime, timedelta
import random

from .constants import CAT_AIR, CAT_THERMAL, CAT_LUMINOUS, CAT_ACOUSTIC

EXAMPLE_FILENAME = "comfort_example.csv"

_START = datetime(2024, 3, 4, 0, 0, 0)
_STEP = timedelta(minutes=15)
_SAMPLES = 2 * 24 * 4

# (category, field, baseline, daily amplitude, noise, peak hour)
_FIELDS = [
    (CAT_AIR,      'CO_2',         520.0, 380.0, 35.0, 14.0),
    (CAT_AIR,      'PM_{2.5}',       8.0,   6.0,  2.0, 18.0),
    (CAT_AIR,      'tvoc',         120.0,  90.0, 15.0, 11.0),
    (CAT_THERMAL,  'temperature',   21.0,   2.5,  0.3, 15.0),
    (CAT_THERMAL,  'humidity',      45.0,  10.0,  2.0,  6.0),
    (CAT_LUMINOUS, 'illuminance',  250.0, 450.0, 30.0, 13.0),
    (CAT_LUMINOUS, 'glare_index',   12.0,   8.0,  1.5, 12.0),
    (CAT_ACOUSTIC, 'noise_level',   42.0,  14.0,  3.0, 10.0),
    (CAT_ACOUSTIC, 'reverb_time',    0.6,   0.2,  0.05, 16.0),
]

# Field whose id sequence jumps after the first day
_RESET_FIELD = 'humidity'
_ID_JUMP = 1000


def _score(value: float, baseline: float, amplitude: float) -> float:
    """0-100 comfort score; best near the baseline."""
    if amplitude <= 0:
        return 100.0
    deviation = abs(value - baseline) / (2.0 * amplitude)
    return round(max(0.0, 100.0 * (1.0 - deviation)), 1)


def generate_example_csv(output_dir: str) -> str:
    """Write the example feed into *output_dir*.

    Returns
    -------
    str
        Path of the written CSV file.
    """
    os.makedirs(output_dir, exist_ok=True)
    rng = random.Random(42)

    rows = []
    next_id = 1
    for category, field, base, amp, noise, peak in _FIELDS:
        for i in range(_SAMPLES):
            t = _START + i * _STEP
            hour = t.hour + t.minute / 60.0
            cycle = math.cos(2.0 * math.pi * (hour - peak) / 24.0)
            value = base + amp * cycle + rng.gauss(0.0, noise)

            if field == 'illuminance' and not 7.0 <= hour <= 19.0:
                value = 0.0
            value = max(value, 0.0)

            record_id = next_id
            if field == _RESET_FIELD and i >= _SAMPLES // 2:
                record_id += _ID_JUMP
            next_id += 1

            r = rng.random()
            if r < 0.015:
                value_text = ''
            elif r < 0.03:
                value_text = 'NaN'
            else:
                value_text = f"{value:.3f}"

            rows.append([
                str(record_id),
                t.strftime('%Y-%m-%dT%H:%M:%SZ'),
                category,
                field,
                value_text,
                str(_score(value, base, amp)),
            ])

    filepath = os.path.join(output_dir, EXAMPLE_FILENAME)
    with open(filepath, 'w', encoding='utf-8', newline='') as fh:
        fh.write('id,time,category,field,value,score\n')
        for row in rows:
            fh.write(','.join(row) + '\n')
    return filepath


if __name__ == '__main__':
    import tempfile
    out_dir = os.path.join(tempfile.gettempdir(), 'comfort_horizon_example')
    path = generate_example_csv(out_dir)
    print(f"  {path} ({os.path.getsize(path):,} bytes)")

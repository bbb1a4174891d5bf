"""
Data access layer.

Design rules:
- Views call ONLY functions in data.service (plus the pure helpers in data.content).
- Live and demo backends share one surface; views never branch on which one is active.
- No env var reads here (config-only).
"""

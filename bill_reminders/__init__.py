"""
Bill Reminders - Source Package

The notification core of a personal-finance app: which unpaid bills need
attention right now, how urgent each one is, and the pay / snooze actions
the app applies on the user's behalf.

DESIGN PRINCIPLES:
1. The clock is an input, never a global
2. Fail early, fail visibly
3. No silent corrections
4. Every user action is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bill Reminders Team"

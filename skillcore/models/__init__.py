"""
Models Module
=============

This module contains the rating systems whose updates cannot be written in closed form.

Included Rating Systems:
- Glicko 2: Extends Glicko with a per player volatility, found each rating period by solving a nonlinear equation with the Illinois variant of regula falsi.
- TrueSkill: A Bayesian rating system developed by Microsoft. Supports any number of teams of any size, ties, draw margins and partial play through truncated gaussian corrections on rank adjacent teams.

Each rating system is implemented as a class bound to an immutable configuration, with methods for rating matches and calculating expected scores. The classes hold no other state, so every call is a pure function of its inputs.
"""

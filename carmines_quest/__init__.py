"""Carmine's Quest: a grid delivery game with shortest-path pursuers.

The session is an immutable :class:`carmines_quest.state.State`; systems are
pure functions returning new states and :class:`carmines_quest.loop.GameLoop`
drives them from a cooperative timer scheduler.
"""

"""Routing — template compilation, the ordered route table, and links.

Routes are registered during setup, compiled into regex matchers, and
tried in registration order at dispatch time.
"""

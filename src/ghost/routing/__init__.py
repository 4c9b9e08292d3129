"""Routing — route builders compiled into a Starlette router.

Routes are registered during setup and compiled when the router freezes.
"""

"""Block sync pipeline.

This module plans resume windows and drives decode and write passes
from the source block log into the target store.
"""

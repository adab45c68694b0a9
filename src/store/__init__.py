"""Version store access layer.

This module reads function versions and routing aliases from Lambda.
It turns raw listing pages into typed records for retention planning.
"""

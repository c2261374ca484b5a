"""Shift Calendar package.

Time-attribution core for machine run/stop data: resolves a day's shift
windows from a shift template, classifies run-state intervals into the eight
time-shift cases and summarizes scheduled weekly hours. Feature modules
(shifts, policy, calendars, classification, reports) follow the same
model/repository/service layering with a thin Flask controller layer.
"""

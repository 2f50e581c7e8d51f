"""Session Attendance package.

Teachers open short-lived, location-stamped sessions; students check in once
per session. Organized by feature modules (users, sessions, attendance,
history, realtime, notes) with a thin Flask controller layer on top of
service/repository layers.
"""

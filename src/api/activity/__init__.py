"""Activity bounded context.

Client-side inactivity handling: the shared last-activity timestamp, the
activity tracker that keeps it fresh and the session timeout state
machine that warns and logs out idle sessions.
"""

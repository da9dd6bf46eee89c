"""Runtime plumbing: clock, errors, logging, settings and the console front-end."""

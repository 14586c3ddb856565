"""
Persistence adapters.

``SQLRepository`` holds every SQL statement the services need; services
depend on it rather than building statements themselves.
"""

# latestview HTTP API layer.
# Created: 2026-10-19
#
# Versioned routers live under /api/v1/. The files router is also mounted at
# /api/files, the path the browser viewer has always polled.

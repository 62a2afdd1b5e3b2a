"""Resource routers: users and posts."""

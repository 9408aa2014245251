"""Personal blog site."""

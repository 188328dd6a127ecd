"""Document persistence: the JSON store and its request dependency."""

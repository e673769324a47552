"""freshshelf: expiry tracking and category prioritization for shop inventory."""

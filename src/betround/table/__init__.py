"""Everything around the betting core: cards, showdown, hand and session drivers."""

"""
Ore-rush bot: planning engine for a fog-of-war ore extraction contest
"""

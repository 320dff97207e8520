"""
Services around the game core: tick scheduling, best-score storage,
board rendering and the session that ties them together.
"""

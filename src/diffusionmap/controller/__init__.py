"""
The CONTROLLER layer drives the model over time (playback, tick scheduling).
"""

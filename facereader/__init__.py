# Face Reader API: portrait upload -> blob store -> Gemini reading
__version__ = "1.0.0"

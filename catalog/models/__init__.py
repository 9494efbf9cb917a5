from .movies import Movie, MovieIn, DeletedMovie, utcnow

__all__ = ["Movie", "MovieIn", "DeletedMovie", "utcnow"]

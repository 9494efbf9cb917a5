"""
View-model for the movie catalog screen.

Owns one CatalogState and mediates between user actions and the API.
Presentation is delegated to three callbacks supplied by the view:

- ``notify(message, kind)`` shows a transient message, kind is
  "success" or "error";
- ``confirm(question)`` asks the user a yes/no question;
- ``render(cards)`` redraws the list from pre-formatted cards.

Failures never raise out of a user action: they become an error
notification and the current state is left as it was.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from catalog_client.api import ApiError, CatalogApi, TransportError
from catalog_client.filters import available_genres, derive_visible
from catalog_client.state import CatalogState, Closed, Creating, Editing, MovieForm

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]
Confirmer = Callable[[str], bool]
Renderer = Callable[[List[str]], None]

NO_MOVIES_PLACEHOLDER = "No movies found"


def _log_notification(message: str, kind: str):
    if kind == "error":
        logger.error(message)
    else:
        logger.info(message)


def _decline(question: str) -> bool:
    return False


def format_rating(rating: Optional[float]) -> str:
    if rating is None:
        return "No rating"
    return f"⭐ {rating:g}/10"


def format_card(movie: Dict[str, Any]) -> str:
    return "\n".join([
        f"{movie['title']} ({movie['release_year']})",
        f"Director: {movie['director']}",
        f"Genre: {movie['genre']}",
        format_rating(movie.get("rating")),
    ])


class CatalogViewModel:
    def __init__(
        self,
        api: CatalogApi,
        notify: Optional[Notifier] = None,
        confirm: Optional[Confirmer] = None,
        render: Optional[Renderer] = None,
    ):
        self.api = api
        self.state = CatalogState()
        self._notify = notify or _log_notification
        self._confirm = confirm or _decline
        self._render = render

    # -- list ---------------------------------------------------------------

    def load(self) -> bool:
        self.state.loading = True
        try:
            movies = self.api.list_movies()
        except TransportError:
            self._notify("Failed to load movies. Please check your connection.", "error")
            return False
        except ApiError as e:
            self._notify(f"Error loading movies: {e.message}", "error")
            return False
        finally:
            self.state.loading = False

        # A fresh snapshot is shown unfiltered until the next search or genre change
        self.state.all_movies = movies
        self.state.visible_movies = list(movies)
        self.render()
        return True

    refresh = load

    def set_search(self, text: str):
        self.state.search_text = text
        self._apply_filters()

    def set_genre(self, genre: str):
        self.state.selected_genre = genre
        self._apply_filters()

    @property
    def genres(self) -> List[str]:
        return available_genres(self.state.all_movies)

    def _apply_filters(self):
        self.state.visible_movies = derive_visible(
            self.state.all_movies,
            self.state.search_text,
            self.state.selected_genre,
        )
        self.render()

    def render(self) -> List[str]:
        if self.state.visible_movies:
            cards = [format_card(movie) for movie in self.state.visible_movies]
        else:
            cards = [NO_MOVIES_PLACEHOLDER]
        if self._render is not None:
            self._render(cards)
        return cards

    # -- editor -------------------------------------------------------------

    def open_editor(self, movie: Optional[Dict[str, Any]] = None):
        if movie is None:
            self.state.editor = Creating()
            self.state.form = MovieForm()
        else:
            self.state.editor = Editing(movie["id"])
            self.state.form = MovieForm.from_movie(movie)

    def edit_movie(self, movie_id: int) -> bool:
        movie = next((m for m in self.state.all_movies if m["id"] == movie_id), None)
        if movie is None:
            return False
        self.open_editor(movie)
        return True

    def close_editor(self):
        self.state.editor = Closed()
        self.state.form = MovieForm()

    cancel = close_editor

    def dismiss(self, inside_editor: bool):
        """Handle a click on the editor backdrop; only clicks outside close it."""
        if not inside_editor:
            self.close_editor()

    def update_form(self, **fields: str):
        for name, value in fields.items():
            if not hasattr(self.state.form, name):
                raise AttributeError(f"Unknown form field: {name}")
            setattr(self.state.form, name, value)

    def submit(self) -> bool:
        editor = self.state.editor
        if isinstance(editor, Closed):
            return False

        payload = self.state.form.to_payload()
        try:
            if isinstance(editor, Editing):
                result = self.api.update_movie(editor.movie_id, payload)
            else:
                result = self.api.create_movie(payload)
        except TransportError:
            self._notify("Failed to save movie. Please try again.", "error")
            return False
        except ApiError as e:
            self._notify(f"Error: {e.describe()}", "error")
            return False

        self._notify(result.get("message", "Movie saved"), "success")
        self.close_editor()
        self.load()
        return True

    # -- delete -------------------------------------------------------------

    def delete_movie(self, movie_id: int, title: str) -> bool:
        if not self._confirm(f'Are you sure you want to delete "{title}"?'):
            return False

        try:
            result = self.api.delete_movie(movie_id)
        except TransportError:
            self._notify("Failed to delete movie. Please try again.", "error")
            return False
        except ApiError as e:
            self._notify(f"Error deleting movie: {e.message}", "error")
            return False

        self._notify(result.get("message", "Movie deleted"), "success")
        self.load()
        return True

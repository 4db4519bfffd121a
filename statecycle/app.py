"""Application state composed of user, settings, and content slices."""
from __future__ import annotations
from typing import FrozenSet, NamedTuple, Optional, Tuple, Union

from .reducer import CombinedReducer, Reducer, reducer
from .store import Store


class Article(NamedTuple):
    """An article shown in the content list."""

    id: int
    title: str
    content: str


# user


class Login(NamedTuple):
    """Action to log a user in. The password is never stored."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Login(username={self.username!r}, password='***')"


class Logout(NamedTuple):
    """Action to log the current user out."""


class UpdateProfile(NamedTuple):
    """Action to change the user's name and email."""

    username: str
    email: str


UserAction = Union[Login, Logout, UpdateProfile]


class UserState(NamedTuple):
    """Logged-in status and profile of the current user."""

    is_logged_in: bool = False
    username: str = ""
    email: str = ""


class UserReducer(Reducer[UserState, UserAction]):
    """Reducer for the user slice."""

    @reducer(Login)
    def login(self, state: UserState, action: Login) -> UserState:
        return state._replace(is_logged_in=True, username=action.username)

    @reducer(Logout)
    def logout(self, state: UserState, action: Logout) -> UserState:
        return state._replace(is_logged_in=False, username="", email="")

    @reducer(UpdateProfile)
    def update_profile(self, state: UserState, action: UpdateProfile) -> UserState:
        return state._replace(username=action.username, email=action.email)


# settings


class ToggleDarkMode(NamedTuple):
    """Action to switch dark mode on or off."""


class ToggleNotifications(NamedTuple):
    """Action to switch notifications on or off."""


class ChangeLanguage(NamedTuple):
    """Action to set the display language."""

    language: str


SettingsAction = Union[ToggleDarkMode, ToggleNotifications, ChangeLanguage]


class SettingsState(NamedTuple):
    """User-facing preferences."""

    is_dark_mode: bool = False
    notifications_enabled: bool = True
    language: str = "zh"


class SettingsReducer(Reducer[SettingsState, SettingsAction]):
    """Reducer for the settings slice."""

    @reducer(ToggleDarkMode)
    def toggle_dark_mode(
        self, state: SettingsState, action: ToggleDarkMode
    ) -> SettingsState:
        return state._replace(is_dark_mode=not state.is_dark_mode)

    @reducer(ToggleNotifications)
    def toggle_notifications(
        self, state: SettingsState, action: ToggleNotifications
    ) -> SettingsState:
        return state._replace(notifications_enabled=not state.notifications_enabled)

    @reducer(ChangeLanguage)
    def change_language(
        self, state: SettingsState, action: ChangeLanguage
    ) -> SettingsState:
        return state._replace(language=action.language)


# content


class LoadArticles(NamedTuple):
    """Action to replace the article list."""

    articles: Tuple[Article, ...]


class ToggleFavorite(NamedTuple):
    """Action to add an article to favorites, or remove it if already there."""

    article_id: int


class ClearFavorites(NamedTuple):
    """Action to remove every favorite."""


ContentAction = Union[LoadArticles, ToggleFavorite, ClearFavorites]


class ContentState(NamedTuple):
    """Loaded articles and the ids of favorited ones."""

    articles: Tuple[Article, ...] = ()
    favorites: FrozenSet[int] = frozenset()

    def is_favorite(self, article_id: int) -> bool:
        """Check whether an article is in favorites."""
        return article_id in self.favorites


class ContentReducer(Reducer[ContentState, ContentAction]):
    """Reducer for the content slice."""

    @reducer(LoadArticles)
    def load_articles(self, state: ContentState, action: LoadArticles) -> ContentState:
        return state._replace(articles=tuple(action.articles))

    @reducer(ToggleFavorite)
    def toggle_favorite(
        self, state: ContentState, action: ToggleFavorite
    ) -> ContentState:
        return state._replace(favorites=state.favorites ^ {action.article_id})

    @reducer(ClearFavorites)
    def clear_favorites(
        self, state: ContentState, action: ClearFavorites
    ) -> ContentState:
        return state._replace(favorites=frozenset())


# app


AppAction = Union[UserAction, SettingsAction, ContentAction]


class AppState(NamedTuple):
    """State of the whole application, one field per slice."""

    user_state: UserState = UserState()
    settings_state: SettingsState = SettingsState()
    content_state: ContentState = ContentState()


app_reducer: CombinedReducer[AppState] = CombinedReducer(
    AppState,
    user_state=UserReducer(),
    settings_state=SettingsReducer(),
    content_state=ContentReducer(),
)


def create_app_store(
    initial_state: Optional[AppState] = None,
) -> Store[AppState, AppAction]:
    """Create a store for the application state."""
    if initial_state is None:
        initial_state = AppState()

    return Store(initial_state, app_reducer)

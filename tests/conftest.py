import pytest
from bs4 import BeautifulSoup

from formguard import form

SIGNUP_PAGE = """
<html>
<body>
  <label for="name">Name</label>
  <form id="signup">
    <div class="row">
      <input id="name" name="name" type="text" required minlength="3" maxlength="10">
      <p role="alert"></p>
    </div>
    <div class="row">
      <label>Email <input name="email" type="email" data-error-email="Check the address"></label>
      <span aria-live="polite"></span>
    </div>
    <div class="row">
      <input name="age" type="number" min="18" max="99" required>
    </div>
    <fieldset>
      <input type="checkbox" name="interests" value="music">
      <input type="checkbox" name="interests" value="sport">
      <input type="checkbox" name="interests" value="books">
      <div role="alert"></div>
    </fieldset>
    <div class="row">
      <textarea name="bio"></textarea>
    </div>
    <input type="submit" name="go" value="Send">
  </form>
</body>
</html>
"""


@pytest.fixture
def signup_page():
    return BeautifulSoup(SIGNUP_PAGE, "html.parser")


@pytest.fixture
def binder(signup_page):
    return form(signup_page)


@pytest.fixture
def make_binder():
    """Build a binder around a bare <form> holding the given markup."""
    def _build(fields_html: str, **kwargs):
        return form(f"<form>{fields_html}</form>", **kwargs)

    return _build

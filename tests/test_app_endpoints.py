import pytest

from cms.permissions import SIGNED_IN_MESSAGE


def _follow(client, r):
    assert r.status_code == 302
    assert r.headers["location"] == "/"
    return client.get("/")


def test_index_lists_documents(client, documents):
    documents.create("about.md")
    documents.create("changes.txt")
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert ">about.md<" in r.text
    assert ">changes.txt<" in r.text
    assert "Sign In" in r.text


def test_session_cookie_is_issued_once(client):
    r = client.get("/")
    assert "cms_session" in r.headers.get("set-cookie", "")
    r = client.get("/")
    assert "set-cookie" not in r.headers


def test_text_document(client, documents):
    documents.create("history.txt", "1993 - Yukihiro Matsumoto dreams up Ruby.\n1995 - Ruby 0.95 released.\n")
    r = client.get("/history.txt")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "Ruby 0.95 released" in r.text


def test_markdown_document(client, documents):
    documents.create("about.md", "# Ruby is ...\n\nA dynamic, open source programming language.\n")
    r = client.get("/about.md")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "#" not in r.text
    assert "<h1>Ruby is ...</h1>" in r.text
    assert "<html" in r.text


def test_image_document(client, documents):
    documents.write("logo.png", b"\x89PNG\r\n\x1a\n")
    r = client.get("/logo.png")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content == b"\x89PNG\r\n\x1a\n"

    documents.write("photo.jpg", b"\xff\xd8\xff")
    assert client.get("/photo.jpg").headers["content-type"] == "image/jpeg"


def test_extensionless_document_is_served_empty(client, documents):
    documents.create("NOTES", "hidden")
    r = client.get("/NOTES")
    assert r.status_code == 200
    assert r.content == b""


def test_missing_document_redirects_with_message(client):
    r = client.get("/dawn_of_everything.epub")
    page = _follow(client, r)
    assert "dawn_of_everything.epub does not exist" in page.text


def test_flash_is_shown_once(client):
    _follow(client, client.get("/ghost.txt"))
    assert "ghost.txt does not exist" not in client.get("/").text


def test_edit_page(admin_client, documents):
    documents.create("about.md", "some *content*")
    r = admin_client.get("/about.md/edit")
    assert r.status_code == 200
    assert "<textarea" in r.text
    assert "some *content*" in r.text


def test_edit_missing_document(admin_client):
    page = _follow(admin_client, admin_client.get("/ghost.md/edit"))
    assert "ghost.md does not exist" in page.text


def test_update_document(admin_client, documents):
    documents.create("changes.txt")
    r = admin_client.post("/changes.txt/update", data={"content": "new content"})
    page = _follow(admin_client, r)
    assert "changes.txt has been updated." in page.text

    r = admin_client.get("/changes.txt")
    assert r.status_code == 200
    assert "new content" in r.text


def test_new_page(admin_client):
    r = admin_client.get("/new")
    assert r.status_code == 200
    assert "Create a new text document:" in r.text


def test_new_document(admin_client, documents):
    r = admin_client.post("/new", data={"filename": "new.md"})
    page = _follow(admin_client, r)
    assert "new.md was created" in page.text
    assert ">new.md<" in page.text
    assert documents.read("new.md") == b""


def test_new_extensionless_document(admin_client, documents):
    _follow(admin_client, admin_client.post("/new", data={"filename": "  NOTES  "}))
    assert documents.exists("NOTES")


def test_new_document_without_filename(admin_client):
    r = admin_client.post("/new", data={"filename": ""})
    assert r.status_code == 422
    assert "A name is required." in r.text


@pytest.mark.parametrize("filename", ["book.epub", "run.py", "photo.jpeg", "a.MD"])
def test_new_document_with_bad_extension(admin_client, documents, filename):
    r = admin_client.post("/new", data={"filename": filename})
    assert r.status_code == 422
    assert "Sorry, only .txt .md .jpg .png extensions are accepted." in r.text
    assert documents.list() == []
    # inline error was consumed by the form page
    assert "Sorry, only" not in admin_client.get("/").text


def test_delete_document(admin_client, documents):
    documents.create("test.md")
    page = _follow(admin_client, admin_client.post("/test.md/delete"))
    assert "test.md was deleted." in page.text
    assert "test.md" not in documents.list()

    page = _follow(admin_client, admin_client.post("/test.md/delete"))
    assert "No such file exists to delete" in page.text
    assert ">test.md<" not in admin_client.get("/").text


def test_duplicate_twice_overwrites(client, documents):
    documents.create("report.md", "# Report")
    page = _follow(client, client.post("/report.md/duplicate"))
    assert "report.md has been duplicated." in page.text

    documents.write("report.md", "# Report v2")
    _follow(client, client.post("/report.md/duplicate"))
    assert documents.list() == ["report.md", "report_dup.md"]
    assert documents.read("report_dup.md") == b"# Report v2"


def test_duplicate_missing_document(client, documents):
    page = _follow(client, client.post("/ghost.md/duplicate"))
    assert "ghost.md does not exist" in page.text
    assert documents.list() == []


def test_signin_form(client):
    r = client.get("/users/signin")
    assert r.status_code == 200
    assert "<input" in r.text
    assert '<button type="submit"' in r.text


def test_signin(client):
    r = client.post("/users/signin", data={"username": "admin", "password": "secret"})
    page = _follow(client, r)
    assert "Welcome!" in page.text
    assert "Signed in as admin" in page.text


def test_signin_with_bad_credentials(client):
    r = client.post("/users/signin", data={"username": "guest", "password": "shhhh"})
    assert r.status_code == 422
    assert "Invalid Credentials" in r.text
    assert "Signed in as" not in client.get("/").text


def test_signout(admin_client):
    assert "Signed in as admin" in admin_client.get("/").text
    page = _follow(admin_client, admin_client.post("/signout"))
    assert "You have been signed out." in page.text
    assert "Signed in as" not in page.text
    assert "Sign In" in page.text


@pytest.mark.parametrize(
    "method, path, data",
    [
        ("get", "/new", None),
        ("post", "/new", {"filename": "test.txt"}),
        ("get", "/test.txt/edit", None),
        ("post", "/test.txt/update", {"content": "changed"}),
        ("post", "/test.txt/delete", None),
    ],
)
def test_signed_out_privileges(client, documents, method, path, data):
    documents.create("test.txt", "original")
    if method == "get":
        r = client.get(path)
    else:
        r = client.post(path, data=data)
    page = _follow(client, r)
    assert SIGNED_IN_MESSAGE in page.text
    assert documents.list() == ["test.txt"]
    assert documents.read("test.txt") == b"original"


def test_register_user(client, credentials):
    r = client.get("/users/register")
    assert r.status_code == 200
    assert 'name="password-2"' in r.text

    r = client.post("/users/register", data={"username": "bob", "password": "pw1", "password-2": "pw1"})
    page = _follow(client, r)
    assert "User registered!" in page.text
    assert credentials.verify("bob", "pw1")

    before = credentials.path.read_bytes()
    r = client.post("/users/register", data={"username": "bob", "password": "pw2", "password-2": "pw2"})
    assert r.status_code == 422
    assert "That username is already taken" in r.text
    assert credentials.path.read_bytes() == before


def test_register_password_mismatch(client, credentials):
    r = client.post("/users/register", data={"username": "bob", "password": "pw1", "password-2": "pw2"})
    assert r.status_code == 422
    assert "Passwords need to match" in r.text
    assert not credentials.exists("bob")


def test_registered_user_can_sign_in(client):
    client.post("/users/register", data={"username": "bob", "password": "pw1", "password-2": "pw1"})
    client.get("/")
    page = _follow(client, client.post("/users/signin", data={"username": "bob", "password": "pw1"}))
    assert "Signed in as bob" in page.text


@pytest.mark.parametrize("filename", ["evil.html", "x.py", "ghost.txt"])
def test_update_does_not_create_documents(admin_client, documents, filename):
    r = admin_client.post(f"/{filename}/update", data={"content": "<script>x</script>"})
    page = _follow(admin_client, r)
    assert f"{filename} does not exist" in page.text
    assert documents.list() == []


def test_sign_in_strips_username(client):
    client.post("/users/register", data={"username": "bob ", "password": "pw1", "password-2": "pw1"})
    client.get("/")
    page = _follow(client, client.post("/users/signin", data={"username": " bob ", "password": "pw1"}))
    assert "Signed in as bob." in page.text

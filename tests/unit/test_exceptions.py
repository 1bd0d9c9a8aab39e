from keyset.app.contracts import exceptions as exc


def test_detailed_error_content() -> None:
    error = exc.InvalidArgumentsError("`limit` must be a positive integer", argument="limit")

    assert error.as_dict() == {
        "content": {
            "message": "`limit` must be a positive integer",
            "code": "invalid_arguments",
            "argument": "limit",
        }
    }
    assert error.raw_code == "invalid_arguments"
    assert isinstance(error, exc.BadRequestError)


def test_default_message_and_explicit_code() -> None:
    error = exc.StorageError(code="db_down")

    assert error.raw_message == "Storage failure"
    assert error.raw_code == "db_down"
    assert isinstance(error, exc.ServiceUnavailableError)


def test_plain_app_error_has_no_code() -> None:
    error = exc.CursorEncodeError()

    assert error.as_dict() == {"content": {"message": "Cursor could not be encoded"}}
    assert error.raw_code is None

from datetime import date, datetime, timedelta, timezone

from nums_api.services.games import get_recent_game_status, upload_game_data

KST = timezone(timedelta(hours=9))


def _upload(client, headers, data):
    return client.post("/api/games/upload", json={"data": data}, headers=headers)


def test_upload_is_idempotent_by_round(client, admin_headers, row):
    data = "\n".join([row(1101), row(1102)])

    first = _upload(client, admin_headers, data)
    assert first.status_code == 200
    body = first.json()
    assert body["total"] == 2
    assert body["successCount"] == 2
    assert body["errorCount"] == 0
    assert "errors" not in body
    assert {item["status"] for item in body["results"]} == {"created"}

    second = _upload(client, admin_headers, data)
    assert {item["status"] for item in second.json()["results"]} == {"updated"}

    listing = client.get("/api/games", params={"all": "true"}).json()
    assert listing["totalItems"] == 2


def test_upload_replaces_stored_values(client, admin_headers, row):
    _upload(client, admin_headers, row(1101, "2024.01.06"))
    _upload(client, admin_headers, row(1101, "2024.01.13"))

    stored = client.get("/api/games/1101").json()["data"]
    assert stored["draw_date"] == "2024-01-13"


def test_failed_record_does_not_abort_batch(client, admin_headers, row):
    data = "\n".join([row(1101), row(0), row(1102)])

    body = _upload(client, admin_headers, data).json()

    assert body["successCount"] == 2
    assert body["errorCount"] == 1
    assert body["errors"][0]["round"] == 0
    assert client.get("/api/games/1102").status_code == 200


def test_malformed_line_rejects_whole_batch(client, admin_headers, row):
    data = "\n".join([row(1101), "1102\t2024.01.13\t1"])

    response = _upload(client, admin_headers, data)

    assert response.status_code == 400
    body = response.json()
    assert body["errorCode"] == "MALFORMED_RECORD"
    assert body["line"] == 2
    assert body["expected"] == 19
    assert body["actual"] == 3
    assert client.get("/api/games/1101").status_code == 404


def test_upload_requires_string_payload(client, admin_headers):
    assert _upload(client, admin_headers, 123).json()["errorCode"] == "INVALID_REQUEST_BODY"
    assert _upload(client, admin_headers, "").json()["errorCode"] == "INVALID_REQUEST_BODY"
    assert _upload(client, admin_headers, "\n\n").json()["errorCode"] == "PARSED_DATA_EMPTY"


def test_pagination_newest_first(client, row):
    upload_game_data("\n".join(row(n) for n in range(1, 26)))

    body = client.get("/api/games", params={"page": 2, "limit": 10}).json()

    assert [game["round"] for game in body["games"]][:2] == [15, 14]
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 25,
        "itemsPerPage": 10,
    }
    assert "totalItems" not in body


def test_round_filter_and_lookup(client, row):
    upload_game_data("\n".join([row(7), row(8)]))

    filtered = client.get("/api/games", params={"round": 8}).json()
    assert [game["round"] for game in filtered["games"]] == [8]

    recent = client.get("/api/games/recent").json()["data"]
    assert recent["round"] == 8

    missing = client.get("/api/games/999")
    assert missing.status_code == 404
    assert missing.json()["errorCode"] == "GAME_NOT_FOUND"


def test_recent_on_empty_store_is_not_found(client):
    response = client.get("/api/games/recent")

    assert response.status_code == 404
    assert response.json()["errorCode"] == "GAME_NOT_FOUND"


def test_invalid_round_path_is_validation_error(client):
    response = client.get("/api/games/0")

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


def test_recent_status_threshold(row):
    upload_game_data(row(1101, "2024.01.06"))

    fresh = get_recent_game_status(7, now=datetime(2024, 1, 13, 12, 0, tzinfo=KST))
    stale = get_recent_game_status(7, now=datetime(2024, 1, 14, 12, 0, tzinfo=KST))

    assert fresh["daysElapsed"] == 7 and fresh["isUpToDate"] is True
    assert stale["daysElapsed"] == 8 and stale["isUpToDate"] is False


def test_recent_status_counts_local_calendar_days(row):
    upload_game_data(row(1101, "2024.01.06"))

    # 01:00 KST on the 13th is still the 12th in UTC
    report = get_recent_game_status(7, now=datetime(2024, 1, 13, 1, 0, tzinfo=KST))

    assert report["daysElapsed"] == 7


def test_recent_status_endpoint(client, admin_headers, row):
    upload_game_data(row(1101, date.today().strftime("%Y.%m.%d")))

    body = client.get("/api/admin/games/recent-status", headers=admin_headers).json()

    assert body["round"] == 1101
    assert body["daysElapsed"] == 0
    assert body["thresholdDays"] == 7
    assert body["isUpToDate"] is True
    assert body["game"]["round"] == 1101


def test_store_error_details_stay_server_side(row):
    outcome = upload_game_data("\n".join([row(1), row(0)]))

    error = outcome.errors[0]["error"]
    assert outcome.errors[0]["round"] == 0
    assert "INSERT" not in error
    assert "[SQL:" not in error
    assert error == "데이터 제약 조건을 위반했습니다."


def test_out_of_range_numbers_fail_per_record(row):
    def with_balls(round_no, number1, bonus):
        columns = row(round_no).split("\t")
        columns[12], columns[18] = number1, bonus
        return "\t".join(columns)

    data = "\n".join([with_balls(1, "0", "7"), with_balls(2, "3", "46"), row(3)])

    outcome = upload_game_data(data)

    assert [item["round"] for item in outcome.errors] == [1, 2]
    assert [item["round"] for item in outcome.results] == [3]

import pytest


def test_ping(api):
    assert api.get("/api/v1/ping").json() == {"status": "ok", "message": "pong"}


def test_health(api):
    body = api.get("/api/v1/health").json()
    assert body["status"] == "ok"
    assert body["version"] == "1.2.3"
    assert body["services"] == {"opensearch": "healthy"}


def test_list_features(api):
    features = api.get("/api/v1/features").json()

    assert len(features) == 1
    autosuggest = features[0]
    assert autosuggest["slug"] == "autosuggest"
    assert autosuggest["active"] is True
    assert autosuggest["requires_install_reindex"] is True
    assert autosuggest["requirements_status"]["code"] == 1
    assert len(autosuggest["requirements_status"]["messages"]) == 2


def test_feature_detail_has_host_field(api):
    detail = api.get("/api/v1/features/autosuggest").json()

    assert detail["settings"]["host"] == "http://search.internal:9200"
    assert detail["settings"]["selection_action"] == "navigate"
    [field] = detail["settings_form"]
    assert field["name"] == "host"
    assert field["label"] == "Host"
    assert field["value"] == "http://search.internal:9200"
    assert "exposed to the public" in field["description"]


def test_unknown_feature(api):
    assert api.get("/api/v1/features/related_posts").status_code == 404
    assert api.put("/api/v1/features/related_posts/settings", json={"settings": {}}).status_code == 404


def test_save_host(api):
    response = api.put("/api/v1/features/autosuggest/settings", json={"settings": {"host": "foo.elasticpress.io"}})

    assert response.status_code == 200
    body = response.json()
    assert body["settings"] == {"host": "http://foo.elasticpress.io"}
    assert body["active"] is True
    assert body["reindex_required"] is False

    status = api.get("/api/v1/features").json()[0]["requirements_status"]
    assert len(status["messages"]) == 1


def test_invalid_host_is_rejected(api):
    response = api.put("/api/v1/features/autosuggest/settings", json={"settings": {"host": "ftp://x.example"}})
    assert response.status_code == 422


@pytest.mark.parametrize("bad_settings", [{"search_fields": "x"}, {"post_type_filter": 5}])
def test_wrong_type_settings_are_rejected(api, bad_settings):
    response = api.put("/api/v1/features/autosuggest/settings", json={"settings": bad_settings})
    assert response.status_code == 422

    assert api.get("/api/v1/features").status_code == 200
    assert api.get("/api/v1/autosuggest/assets").json()["enqueued"] is True


def test_saving_again_replaces_settings(api):
    api.put("/api/v1/features/autosuggest/settings", json={"settings": {"host": "foo.elasticpress.io"}})
    body = api.put("/api/v1/features/autosuggest/settings", json={"settings": {"post_type_filter": "post"}}).json()
    assert body["settings"] == {"post_type_filter": "post"}

    detail = api.get("/api/v1/features/autosuggest").json()
    assert detail["settings"]["host"] == "http://search.internal:9200"
    assert detail["settings"]["post_type_filter"] == "post"


def test_toggling_keeps_saved_settings(api):
    api.put("/api/v1/features/autosuggest/settings", json={"settings": {"host": "foo.elasticpress.io"}})
    body = api.put("/api/v1/features/autosuggest/settings", json={"active": False}).json()

    assert body["active"] is False
    assert body["settings"] == {"host": "http://foo.elasticpress.io"}


def test_reactivation_requires_reindex(api):
    api.put("/api/v1/features/autosuggest/settings", json={"active": False})
    body = api.put("/api/v1/features/autosuggest/settings", json={"active": True}).json()
    assert body["reindex_required"] is True


def test_assets_enqueued(api):
    body = api.get("/api/v1/autosuggest/assets").json()

    assert body["enqueued"] is True
    assert body["assets"]["options"] == {
        "index": "wp-posts",
        "host": "http://search.internal:9200",
        "postType": "all",
        "searchFields": ["post_title.suggest", "term_suggest"],
        "action": "navigate",
    }


def test_assets_for_other_site(api):
    body = api.get("/api/v1/autosuggest/assets", params={"site_id": 3}).json()
    assert body["assets"]["options"]["index"] == "wp-posts-3"


def test_blank_host_short_circuits_assets(api):
    api.put("/api/v1/features/autosuggest/settings", json={"settings": {"host": ""}})
    assert api.get("/api/v1/autosuggest/assets").json() == {"enqueued": False, "assets": None}


def test_inactive_feature_serves_nothing(api):
    api.put("/api/v1/features/autosuggest/settings", json={"active": False})
    assert api.get("/api/v1/autosuggest/assets").json()["enqueued"] is False
    assert api.get("/api/v1/autosuggest/suggest", params={"q": "hel"}).status_code == 404


def test_option_filters_from_app_state(app, api):
    app.state.autosuggest_option_filters = [lambda options: {**options, "action": "search"}]
    assert api.get("/api/v1/autosuggest/assets").json()["assets"]["options"]["action"] == "search"


def test_suggest(api, fake_opensearch):
    fake_opensearch._search_response = {
        "hits": {"total": {"value": 1}, "hits": [{"_score": 1.0, "_source": {"post_title": "Hello"}}]}
    }
    body = api.get("/api/v1/autosuggest/suggest", params={"q": "hel"}).json()

    assert body["total"] == 1
    assert body["hits"] == [{"post_title": "Hello", "score": 1.0}]


def test_computed_mapping_follows_active_features(api):
    mapping = api.get("/api/v1/index/mapping").json()
    assert "term_suggest" in mapping["mappings"]["post"]["properties"]

    api.put("/api/v1/features/autosuggest/settings", json={"active": False})
    mapping = api.get("/api/v1/index/mapping").json()
    assert "term_suggest" not in mapping["mappings"]["post"]["properties"]


def test_index_setup(api, fake_opensearch):
    body = api.post("/api/v1/index/setup").json()

    assert body["created"] is True
    assert body["index_name"] == "wp-posts"
    assert len(fake_opensearch.indices.created) == 1


def test_sync_document(api, fake_opensearch):
    response = api.post(
        "/api/v1/index/documents/42",
        json={"fields": {"post_title": "Hello", "terms": {"category": [{"name": "News"}, {"name": "Tech"}]}}},
    )

    assert response.status_code == 200
    assert response.json()["fields"]["term_suggest"] == ["News", "Tech"]
    assert fake_opensearch.indexed[0][1] == "42"


def test_status_report(api):
    body = api.get("/api/v1/status-report").json()

    assert [report["title"] for report in body["reports"]] == ["Features", "Index", "Autosuggest"]
    assert body["text"].startswith("## Features\nAutosuggest: active\n")

import pytest
from werkzeug.datastructures import MultiDict

from withroom.errors import FetchError
from withroom.tabs import (TabState, fetch_tab_studies, TABS, TAB_ENDPOINTS, TAB_FIELDS,
                           CREATED, LIKED, REQUEST_JOIN, EMPTY_MESSAGES)

from conftest import study_json


@pytest.mark.parametrize('tab', TABS)
def test_switch_always_resets_page(tab):
    state = TabState(CREATED, 5)
    state.go_to(3)
    state.switch(tab)
    assert state.active_tab == tab
    assert state.current_page == 1


def test_initial_state():
    state = TabState()
    assert state.active_tab == CREATED
    assert state.current_page == 1


def test_go_to_keeps_tab():
    state = TabState(LIKED)
    state.go_to(4)
    assert (state.active_tab, state.current_page) == (LIKED, 4)
    state.go_to(0)
    assert state.current_page == 1


def test_unknown_tab_is_programming_error():
    with pytest.raises(KeyError):
        TabState().switch('unknown')


def test_unknown_tab_in_request_falls_back_to_created():
    state = TabState.from_request(MultiDict({'tab': 'nope', 'page': '3'}))
    assert state.active_tab == CREATED
    assert state.current_page == 3


def test_request_with_new_tab_ignores_page():
    state = TabState.from_request(MultiDict({'tab': LIKED, 'page': '4'}), last_tab=CREATED)
    assert (state.active_tab, state.current_page) == (LIKED, 1)


def test_request_with_same_tab_keeps_page():
    state = TabState.from_request(MultiDict({'tab': LIKED, 'page': '4'}), last_tab=LIKED)
    assert (state.active_tab, state.current_page) == (LIKED, 4)


def test_request_without_tab_stays_on_last_tab():
    state = TabState.from_request(MultiDict({'page': '2'}), last_tab=REQUEST_JOIN)
    assert (state.active_tab, state.current_page) == (REQUEST_JOIN, 2)


@pytest.mark.parametrize('tab', TABS)
def test_fetch_uses_tab_endpoint_and_field(api, fake_session, tab):
    fake_session.add('GET', TAB_ENDPOINTS[tab], {TAB_FIELDS[tab]: [study_json(1), study_json(2)]})
    studies = fetch_tab_studies(api, tab)
    assert [s.study_id for s in studies] == [1, 2]
    assert fake_session.calls[0]['headers']['Authorization'] == 'Bearer token-1'


def test_missing_field_is_empty_list(api, fake_session):
    fake_session.add('GET', TAB_ENDPOINTS[LIKED], {})
    assert fetch_tab_studies(api, LIKED) == []


def test_malformed_payload_raises_fetch_error(api, fake_session):
    fake_session.add('GET', TAB_ENDPOINTS[CREATED], {'groupLeaderStudies': 'oops'})
    with pytest.raises(FetchError):
        fetch_tab_studies(api, CREATED)


def test_load_keeps_applicant_fields(api, fake_session):
    fake_session.add('GET', TAB_ENDPOINTS[REQUEST_JOIN],
                     {'responseSignUpStudies': [study_json(3, memberId=9, nickName='민수')]})
    state = TabState(REQUEST_JOIN)
    assert len(state.load(api)) == 1
    assert state.studies[0].member_id == 9
    assert state.empty_message == EMPTY_MESSAGES[REQUEST_JOIN]

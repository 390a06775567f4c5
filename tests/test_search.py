import pytest
from werkzeug.datastructures import MultiDict

from withroom.search import SearchFilter


def test_selecting_again_clears():
    search_filter = SearchFilter()
    search_filter.toggle('difficulty', '초급')
    assert search_filter.is_selected('difficulty', '초급')
    search_filter.toggle('difficulty', '초급')
    assert not search_filter.active


def test_params_drop_empty_values():
    search_filter = SearchFilter.from_args(MultiDict({'topic': '특강', 'type': ''}))
    assert search_filter.params() == {'topic': '특강'}


def test_toggled_params_leave_current_state():
    search_filter = SearchFilter(weekDay='월')
    assert search_filter.toggled_params('type', 'ONLINE') == {'weekDay': '월', 'type': 'ONLINE'}
    assert search_filter.params() == {'weekDay': '월'}


def test_reset():
    assert SearchFilter(topic='특강', state='true').reset().params() == {}


def test_unknown_category():
    with pytest.raises(KeyError):
        SearchFilter(color='red')
    with pytest.raises(KeyError):
        SearchFilter().toggle('color', 'red')

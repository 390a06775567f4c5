"""
스터디 검색 필터

필터 상태는 쿼리스트링으로 주고받는다. 이미 선택된 값을 다시 고르면 선택이 해제된다.
"""
FILTER_KEYS = ['topic', 'difficulty', 'weekDay', 'type', 'state']

# 화면에 노출하는 필터 (state는 화면에 없고 쿼리로만 받는다)
FILTER_OPTIONS = {
    'topic': ('주제', ['개념학습', '응용/활용', '프로젝트', '챌린지', '자격증/시험', '취업/코테', '특강', '기타']),
    'difficulty': ('난이도', ['초급', '중급', '고급']),
    'weekDay': ('요일', ['월', '화', '수', '목', '금', '토', '일']),
    'type': ('유형', ['OFFLINE', 'ONLINE']),
}


class SearchFilter:

    def __init__(self, **values):
        unknown = set(values) - set(FILTER_KEYS)
        if unknown:
            raise KeyError(', '.join(sorted(unknown)))
        self.values = {key: values.get(key) or '' for key in FILTER_KEYS}

    @classmethod
    def from_args(cls, args):
        return cls(**{key: args.get(key, '') for key in FILTER_KEYS})

    def toggle(self, category, value):
        if category not in self.values:
            raise KeyError(category)
        self.values[category] = '' if self.values[category] == value else value
        return self

    def reset(self):
        self.values = {key: '' for key in FILTER_KEYS}
        return self

    def is_selected(self, category, value):
        return self.values.get(category) == value

    def params(self):
        """빈 값은 빼고 쿼리 파라미터로 변환"""
        return {key: value for key, value in self.values.items() if value not in ('', None)}

    def toggled_params(self, category, value):
        # 링크 하나를 누르면 적용될 필터 상태
        return SearchFilter(**self.values).toggle(category, value).params()

    @property
    def active(self):
        return bool(self.params())

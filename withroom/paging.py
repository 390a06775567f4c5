"""
목록 페이지 나누기

전체 목록을 한 번에 받아 와서 화면에서 페이지 단위로 자른다.
페이지 번호는 1부터 시작하며, 마지막 페이지를 넘는 번호는 에러 없이 빈 목록을 돌려준다.
"""
import math


def slice_page(items, page, per_page):
    if per_page <= 0:
        raise ValueError('per_page는 1 이상이어야 합니다.')
    if page < 1:
        return []
    start = (page - 1) * per_page
    return list(items[start:start + per_page])


def page_count(items, per_page):
    if per_page <= 0:
        raise ValueError('per_page는 1 이상이어야 합니다.')
    return math.ceil(len(items) / per_page)


class Pagination:
    """
    템플릿에서 페이지 링크를 그리기 위한 객체

    Flask-SQLAlchemy의 paginate() 결과와 같은 속성 이름을 사용한다.
    """

    def __init__(self, all_items, page, per_page):
        self.all_items = list(all_items)
        self.page = page
        self.per_page = per_page
        self.total = len(self.all_items)
        self.pages = page_count(self.all_items, per_page)
        self.items = slice_page(self.all_items, page, per_page)

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.pages

    @property
    def prev_num(self):
        return self.page - 1 if self.has_prev else None

    @property
    def next_num(self):
        return self.page + 1 if self.has_next else None

    @property
    def show_controls(self):
        # 한 페이지 이하면 페이지 컨트롤을 숨긴다
        return self.pages > 1

    def iter_pages(self, left_edge=2, left_current=2, right_current=4, right_edge=2):
        last = 0
        for num in range(1, self.pages + 1):
            if (num <= left_edge
                    or self.page - left_current - 1 < num < self.page + right_current
                    or num > self.pages - right_edge):
                if last + 1 != num:
                    yield None
                yield num
                last = num

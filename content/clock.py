"""날짜/시간 콘텐츠 모듈 — 시계 영역과 요일 라벨 문자열을 만든다."""

from datetime import date, datetime

# 요일 영문 약어
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class ClockContent:
    """시계·날짜·요일 문자열을 생성한다 (로케일 비의존)."""

    def time_line(self, now: datetime) -> str:
        """12시간제 시각, 예: '3:04:05 PM'."""
        ampm = "AM" if now.hour < 12 else "PM"
        hour = now.hour % 12
        if hour == 0:
            hour = 12
        return f"{hour}:{now.minute:02d}:{now.second:02d} {ampm}"

    def date_line(self, now: date) -> str:
        """요일·월·일, 예: 'Wed Jul 31'."""
        return f"{WEEKDAY_NAMES[now.weekday()]} {MONTH_NAMES[now.month - 1]} {now.day}"

    def day_label(self, day: date) -> str:
        """예보 카드 상단 요일, 예: 'WED'."""
        return WEEKDAY_NAMES[day.weekday()].upper()

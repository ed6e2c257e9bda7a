from src.meal_registration.meal_registration.meals.mysql_meal_repository import MySQLMealRepository


class FakeCursor:
    def __init__(self, log):
        self._log = log

    def execute(self, sql, params=()):
        self._log.append((sql, params))

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, log):
        self._log = log

    def cursor(self, dictionary=True):
        return FakeCursor(self._log)

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.log = []

    def connect(self):
        return FakeConnection(self.log)


def test_user_filter_matches_wildcards_literally():
    factory = FakeConnectionFactory()

    assert MySQLMealRepository(factory).list_filtered(user_name="A_B") == []

    [(sql, params)] = factory.log
    assert "LIKE %s ESCAPE '\\\\'" in sql
    assert params == ("%a\\_b%",)

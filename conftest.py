# conftest.py

import pytest


@pytest.fixture(autouse=True)
def _db_guard_do_django_em_simpletestcase(request, django_db_blocker):
    """
    Em SimpleTestCase sem `databases`, deixa o bloqueio de banco por conta do
    próprio Django (como em `manage.py test`). O bloqueio extra do
    pytest-django pega o aclose_old_connections do Channels na conexão que os
    TestCase anteriores deixam aberta.
    """
    from django.test import SimpleTestCase

    cls = getattr(request, 'cls', None)
    if cls is not None and issubclass(cls, SimpleTestCase) and not cls.databases:
        with django_db_blocker.unblock():
            yield
    else:
        yield

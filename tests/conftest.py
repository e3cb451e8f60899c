"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

# src/app.py: one hunk at new line 10 with 3 non-deletion lines.
# docs/empty.md: header only, no hunks.
TWO_FILE_DIFF = """\
diff --git a/src/app.py b/src/app.py
index 1111111..2222222 100644
--- a/src/app.py
+++ b/src/app.py
@@ -10,3 +10,3 @@ def main():
 context_one
-old_line
+new_line
 context_two
diff --git a/docs/empty.md b/docs/empty.md
index 3333333..4444444 100644
--- a/docs/empty.md
+++ b/docs/empty.md
"""

MULTI_HUNK_DIFF = """\
diff --git a/lib/util.py b/lib/util.py
index aaaaaaa..bbbbbbb 100644
--- a/lib/util.py
+++ b/lib/util.py
@@ -1,4 +1,5 @@
 import os
+import sys

 def helper():
-    return 1
+    return 2
@@ -40,2 +41,3 @@ def other():
     pass
+    # trailing

diff --git a/lib/new.py b/lib/new.py
new file mode 100644
index 0000000..ccccccc
--- /dev/null
+++ b/lib/new.py
@@ -0,0 +1,2 @@
+def created():
+    return True
\\ No newline at end of file
diff --git a/lib/gone.py b/lib/gone.py
deleted file mode 100644
index ddddddd..0000000
--- a/lib/gone.py
+++ /dev/null
@@ -1,2 +0,0 @@
-def removed():
-    pass
"""


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def two_file_diff() -> str:
    return TWO_FILE_DIFF


@pytest.fixture
def multi_hunk_diff() -> str:
    return MULTI_HUNK_DIFF


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

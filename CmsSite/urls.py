"""
URL configuration for CmsSite project.

The elements app only ships template helpers, so no routes are mounted.
"""

urlpatterns = []

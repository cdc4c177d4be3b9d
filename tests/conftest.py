"""
Shared fixtures for gocmt tests.
"""

import logging

import pytest

from .utils import go


@pytest.fixture(autouse=True)
def _quiet_gocmt_logger():
    # The CLI attaches a stderr handler to the package logger; reset it between tests
    logger = logging.getLogger("gocmt")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def sample_go():
    """Go file mixing documented, undocumented, unexported and local declarations."""
    return go("""
        // Package sample is used by the tests.
        package sample

        import "fmt"

        // Greeting is the default greeting.
        const Greeting = "hi"

        type Server struct {
        	Name string
        }

        // Start
        func (s *Server) Start() {
        	var Local = 1
        	type Inner int
        	fmt.Println(Local)
        }

        // stops the server.
        func (s *Server) Stop() {}

        //nolint:unused
        func Run() {}

        func helper() {}

        var (
        	// A doc
        	A = 1
        	b = 2
        	C = 3
        )
        """)

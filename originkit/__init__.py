"""Server-side toolkit: cron expressions, timers, queues, pools, maps, utilities, HTTP and MongoDB clients."""

__version__ = "0.1.0"
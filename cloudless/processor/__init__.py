"""Processing settings, requests, URL templates, sorting, writing, event adapters and metrics."""
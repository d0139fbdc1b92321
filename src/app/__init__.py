"""Command line front end for safari-tab-restore."""

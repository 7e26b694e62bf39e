# prompts.py
"""Texts shown by the setup wizard."""

from validators import (
    DEFAULT_INVENTORY_POLL, DEFAULT_RETRY_POLL, DEFAULT_SERVER_IP,
    DEFAULT_SERVER_URL, DEFAULT_UPDATE_POLL, HOSTED_MENDER_URL,
    MINIMUM_POLL_INTERVAL,
)

WIZARD = (
    "Mender Client Setup\n"
    "===================\n\n"
    "Setting up the Mender client: The client will regularly poll the "
    "server to check for updates and report its inventory data.\n"
    "Get started by first configuring the device type and settings for "
    "communicating with the server."
)
DONE = "Mender setup successfully."

DEVICE_TYPE = (
    "\nThe device type property is used to determine which Mender Artifact "
    "are compatible with this device.\n"
    "Enter a name for the device type (e.g. raspberrypi3): [{default}] "
)
HOSTED_MENDER = "\nAre you connecting this device to hosted.mender.io? [Y/n] "
CREDENTIALS = "Enter your credentials for hosted.mender.io"
EMAIL = "Email: "
PASSWORD = "Password: "
DEMO_SERVER = (
    "\nDemo server uses a self-signed certificate for \"docker.mender.io\" "
    "and modifies device's /etc/hosts with the server's IP address "
    "(Required if using Mender demo server.)\n"
    "Do you want to configure the client for a demo server? [Y/n] "
)
SERVER_IP = f"\nSet the IP of the Mender Server: [{DEFAULT_SERVER_IP}] "
SERVER_URL = f"\nSet the URL of the Mender Server: [{DEFAULT_SERVER_URL}] "
SERVER_CERT = (
    "\nSet the location of the certificate of the server; leave blank if "
    "using http (not recommended) or a certificate from a known authority "
    "(filepath, for example /etc/mender/server.crt): "
)
DEMO_INTERVALS = (
    "\nDemo intervals uses short poll and retry intervals "
    "(Recommended for testing.)\n"
    "Do you want to run the client in demo mode? [Y/n] "
)
UPDATE_POLL = (
    "\nSet the update poll interval - the frequency with which the client "
    "will send an update check request to the server, in seconds: "
    f"[{DEFAULT_UPDATE_POLL}] "
)
INVENTORY_POLL = (
    "\nSet the inventory poll interval - the frequency with which the "
    "client will send inventory data to the server, in seconds: "
    f"[{DEFAULT_INVENTORY_POLL}] "
)
RETRY_POLL = (
    "\nSet the retry poll interval - the frequency with which the client "
    "tries to communicate with the server (note: the client may attempt "
    "more often initially based on the previous intervals, but will fall "
    "back to this value if the server is busy): "
    f"[{DEFAULT_RETRY_POLL}] "
)

# -- Responses on invalid input ------------------------------------------------

RSP_INVALID_DEVICE = (
    "The device type \"{value}\" contains spaces or special characters.\n"
    "Please try again: [{default}] "
)
RSP_SELECT_YN = "Please select Y or N: "
RSP_INVALID_EMAIL = (
    "\n\"{value}\" does not appear to be a valid email address.\n"
    "Please enter a valid email address: "
)
RSP_BLANK_PASSWORD = "Password cannot be blank.\nTry again: "
RSP_HM_LOGIN = (
    "We couldn't find a Hosted Mender account with those credentials.\n"
    "Please try again: "
)
RSP_CONNECTION_ERROR = (
    f"There was a problem connecting to {HOSTED_MENDER_URL}.\n"
    "Please check your device's connection and try again."
)
RSP_NOT_SECONDS = (
    "The value you entered wasn't an integer number.\n"
    "Please enter a number (in seconds): "
)
RSP_INVALID_INTERVAL = (
    "Polling interval too short.\n"
    f"Please enter a value of minimum {MINIMUM_POLL_INTERVAL} seconds: "
)
RSP_INVALID_URL = "Please enter a valid url for the server: "
RSP_INVALID_IP = "Please enter a valid IP address: "
RSP_FILE_NOT_EXIST = "The file '{value}' does not exist.\nPlease try again: "

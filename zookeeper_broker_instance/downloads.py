# Download targets for the Kafka source tarball and the shell commands to fetch it

import posixpath

INSTALL_TAR = "which tar || (which apt-get && sudo apt-get update && sudo apt-get install -y tar) || sudo yum install -y tar"
INSTALL_WGET = "which wget || (which apt-get && sudo apt-get update && sudo apt-get install -y wget) || sudo yum install -y wget"


class DownloadResolver:

    def __init__(self, config):
        self.version = config["version"]
        self.urls = config["download_urls"]
        self.unpacked_dir_name = config["unpacked_dir_name"]

    @property
    def targets(self):
        return [url.format(version=self.version) for url in self.urls]

    @property
    def filename(self):
        return posixpath.basename(self.targets[0])

    def unpacked_directory_name(self, default):
        return self.unpacked_dir_name or default


def download_url_as(urls, save_as):
    if not urls:
        raise ValueError("No download urls given for " + save_as)
    # Try every url in turn, the first that succeeds wins
    attempts = [f'wget -q -O {save_as} "{url}"' for url in urls]
    return [INSTALL_WGET, "(" + " || ".join(attempts) + ") || exit 9"]

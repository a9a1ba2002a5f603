import pytest

from zookeeper_broker_instance.downloads import DownloadResolver, download_url_as
from zookeeper_broker_instance.zookeeper_config import load_config


def test_resolver_formats_version():
    resolver = DownloadResolver(load_config())
    assert resolver.targets[0] == "https://archive.apache.org/dist/kafka/0.8.0-beta1/kafka-0.8.0-beta1-src.tgz"
    assert resolver.filename == "kafka-0.8.0-beta1-src.tgz"
    assert resolver.unpacked_directory_name("kafka-0.8.0-beta1-src") == "kafka-0.8.0-beta1-src"


def test_resolver_unpacked_override():
    config = load_config()
    config["unpacked_dir_name"] = "kafka-custom"
    assert DownloadResolver(config).unpacked_directory_name("kafka-0.8.0-beta1-src") == "kafka-custom"


def test_download_tries_each_url():
    commands = download_url_as(["http://a/k.tgz", "http://b/k.tgz"], "k.tgz")
    assert commands[0].startswith("which wget")
    assert commands[1] == '(wget -q -O k.tgz "http://a/k.tgz" || wget -q -O k.tgz "http://b/k.tgz") || exit 9'


def test_download_needs_urls():
    with pytest.raises(ValueError):
        download_url_as([], "k.tgz")

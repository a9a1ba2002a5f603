# Deploy and supervise the Zookeeper server bundled with Kafka over ssh
